from typing import Annotated, Any, Optional

from pydantic import BaseModel, StringConstraints


class SummarizeRequest(BaseModel):
    url: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class SummarizeResponse(BaseModel):
    url: str
    summary: str


class ErrorResponse(BaseModel):
    error: str
    details: Optional[Any] = None
    message: Optional[str] = None
