"""
CascadeBlog Backend - Middleware Package
=========================================

Middleware Chain:
    Request → [Request ID] → [Access Log] → [GZip] → [CORS] → Route Handler

    Request ID runs first so the access log line (written on the way out)
    and any exception handler can read the id from the ContextVar.
"""
