# Middleware package init
"""
Pastebin Backend — Middleware Package
=======================================

Middleware Chain (order matters!):
    Request → [Rate Limit] → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Rate Limit first: reject over-quota clients before any processing
    2. Request ID: correlation ID for logs and error bodies
    3. Logging: one access line per request, tagged with the request ID
    4. GZip and CORS: FastAPI's stock middleware (browser UI on another origin)
"""
