# Middleware package init
"""
Exercise Tracker: Middleware Package
=======================================

Middleware Chain (order matters):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    The request id is set first so the access log line and any error log
    written while handling the request carry it.
"""
