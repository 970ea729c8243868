"""Common schema patterns."""
from pydantic import BaseModel
from typing import List


class MessageResponse(BaseModel):
    """Simple message response."""
    message: str


class FieldErrorResponse(BaseModel):
    """One field-scoped validation problem."""
    field: str
    message: str


class ValidationErrorResponse(BaseModel):
    """Body of a 422 response from a form endpoint."""
    detail: List[FieldErrorResponse]


class UploadResponse(BaseModel):
    """Public URL of stored artwork."""
    url: str
