# Routes package init
"""
ScholarThynk Backend — API Routes Package
=========================================

Route Inventory:
    - file_viewer.py: POST   /api/fileViewer/get       (list a folder)
                      POST   /api/fileViewer/create    (create a folder)
                      PUT    /api/fileViewer/rename    (rename a folder or note)
                      DELETE /api/fileViewer/delete    (delete, recursively for folders)
    - notes.py:       POST   /api/note/new             (create "Untitled" note)
                      PUT    /api/note/update          (save title + content)
                      POST   /api/note/get/note        (open by path + title)
                      POST   /api/note/get/notePath    (path of a note by id)
                      GET    /api/note/get/notes       (all notes of the caller)
    - health.py:      GET    /health                   (service health check)

Routes stay thin: read the body, resolve the caller, call a service, shape
the response. Business rules live in the services.
"""
