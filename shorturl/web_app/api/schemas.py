"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from datetime import datetime


class ShortURLResponse(BaseModel):
    """Response after shortening a URL."""

    original_url: str = Field(..., description="The original URL, as submitted")
    short_url: int = Field(..., description="The sequential short URL identifier")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "original_url": "https://www.freecodecamp.org",
                    "short_url": 1
                }
            ]
        }
    }


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="Error message")


class GreetingResponse(BaseModel):
    greeting: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    database: str = Field(..., description="Database status")
    cache: str = Field(..., description="Cache status")
    total_urls: int = Field(..., description="Number of stored short URLs")
    timestamp: datetime = Field(..., description="Check timestamp")
