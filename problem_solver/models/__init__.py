"""Pydantic models for API requests and responses.

Models:
    - ChatResponse: Successful chat reply
    - ErrorResponse: Failure body for any error status
"""

from problem_solver.models.schemas import ChatResponse, ErrorResponse

__all__ = ["ChatResponse", "ErrorResponse"]
