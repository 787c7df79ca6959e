# Middleware package init
"""
CargoSnap Proxy — Middleware Package
======================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Access Log] → [CORS] → [Unexpected Error] → Route Handler

    1. Request ID: correlation id, reused from X-Request-ID when the client sends one
    2. Access Log: method, path, status and duration tagged with that id
    3. CORS: FastAPI's CORSMiddleware (permissive by default)
    4. Unexpected Error: unhandled exceptions become the generic 400 body, still
       inside the layers above so the answer keeps its CORS and request-id headers
"""
