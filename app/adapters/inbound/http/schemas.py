"""HTTP adapter request and response schemas."""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class RenewListingRequest(BaseModel):
    """Renew listing request body."""

    # Range is checked by the domain so that every caller gets the same rule
    duration_days: Optional[int] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "duration_days": 30,
            }
        }
    )


class ErrorResponse(BaseModel):
    """Error body returned by the exception handlers."""

    status: int
    error: str
    message: str
    path: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "status": 409,
                "error": "Conflict",
                "message": "Listing with ID 7 is already approved.",
                "path": "/api/admin/listings/7/approve",
            }
        }
    )
