# Middleware package init
"""
PawMart Backend — Middleware Package
======================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID first: every later log line can carry the correlation ID
    2. Logging: records status and duration once the handler has answered
    3. CORS: FastAPI's CORSMiddleware, answers browser preflight requests
"""
