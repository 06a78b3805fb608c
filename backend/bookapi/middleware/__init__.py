# Middleware package init
"""
Book API - Middleware Package
=============================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Rate Limit] → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Rate Limit first: rejected requests do no further work
    2. Request ID: correlation ID for the log line and the response header
    3. Logging: one access line with status and duration
    4. GZip / CORS: Starlette's stock middleware
"""
