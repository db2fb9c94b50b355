# Middleware package init
"""
Hotel Listings API: Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: correlation ID for logs and error bodies
    2. Logging: method, path, status and duration, plus the hotel and upload
       count a handler recorded on request.state
    3. GZip / CORS: FastAPI's stock middleware

    Responses travel back through the same chain in reverse, which is where
    the X-Request-ID header and the duration are added.
"""
