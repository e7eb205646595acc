"""Common schemas shared across API endpoints."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model exchanging camelCase keys with clients."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorResponse(CamelModel):
    """Standard error response schema."""

    success: bool = Field(default=False)
    message: str = Field(..., description="Error message")
    code: str = Field(..., description="Error code for programmatic handling")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": False,
                "message": "Invalid Email or Password.",
                "code": "INVALID_CREDENTIALS",
            },
        },
    )


class MessageResponse(CamelModel):
    """Plain success response."""

    success: bool = True
    message: str
