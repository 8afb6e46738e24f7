# Middleware package init
"""
Todo API — Middleware Package
===============================

Middleware Chain (outermost first):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: sets the correlation id used by every later log line
    2. Logging: one access line per request, with status and duration
    3. GZip / CORS: Starlette's stock middleware
"""
