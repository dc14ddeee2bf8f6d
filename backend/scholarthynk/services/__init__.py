# Services package init
"""
ScholarThynk Backend — Services Layer
=====================================

What:  Business logic layer sitting between routes (HTTP) and the document store.
Why:   Routes handle HTTP, services handle the tree invariants.

Service Inventory:
    - DocumentStore: find / insert / update / delete by exact-match predicate
    - path_resolver: ["root", "A", "B"] → folder id chain
    - TreeService:   list, create folder, rename, recursive delete
    - NoteService:   create, update, open, reverse path, list all notes

Every service call takes the store and the owner id explicitly. Services keep
no state between calls, so one module-level instance of each is shared.
"""
