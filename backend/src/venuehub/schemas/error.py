"""Error response schemas.

Every non-2xx response produced by the exception handlers in main.py uses
the envelope {"error": {"code": "...", "message": "..."}}. Codes in use:
``not_found``, ``geolocation_error``, ``domain_error``, ``internal_error``.
"""

from pydantic import BaseModel


class ErrorDetail(BaseModel):
    code: str
    message: str


class ErrorResponse(BaseModel):
    error: ErrorDetail
