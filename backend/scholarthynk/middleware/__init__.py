# Middleware package init
"""
ScholarThynk Backend — Middleware Package
=========================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID first: every later log line can carry the correlation id
    2. Logging: records status and duration once the handler has finished,
       plus the owner id the authentication dependency left on request.state
"""
