"""FastAPI endpoints for the problem solver chat.

Endpoints:
    - GET /health: Service health status
    - POST /api/chat: Chat request with optional PDF or image attachment
"""

from problem_solver.api.app import app, create_app

__all__ = ["app", "create_app"]
