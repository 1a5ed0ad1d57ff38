# Middleware package init
"""
Podcast Backend: Middleware Package
====================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    - Request ID: correlation id stored in a ContextVar and echoed in X-Request-ID
    - Logging: method, path, status and duration of every request

Authentication is not middleware: the access guard runs inside the GraphQL
endpoint, where the identity context is built per operation.
"""
