"""
xdiff Core Data Models

Data structures shared by the request executor and the response reducer.
"""

from datetime import datetime, UTC
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator


class HTTPResponse(BaseModel):
    """Fully read HTTP response, detached from the client that produced it."""

    version: str = Field(default="HTTP/1.1", description="Protocol version")
    status_code: int = Field(description="HTTP status code")
    reason: str = Field(default="", description="Status reason phrase")
    headers: List[Tuple[str, str]] = Field(
        default_factory=list, description="Headers in the order received"
    )
    text: str = Field(default="", description="Decoded response body")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC), description="Response timestamp"
    )
    duration_ms: int = Field(default=0, description="Response time in milliseconds")

    @field_validator("status_code")
    @classmethod
    def validate_status_code(cls, v: int) -> int:
        if not (100 <= v <= 599):
            raise ValueError(f"Invalid HTTP status code: {v}")
        return v

    def get_header(self, name: str) -> Optional[str]:
        """Return the first value of a header, matching the name case-insensitively."""
        lowered = name.lower()
        for key, value in self.headers:
            if key.lower() == lowered:
                return value
        return None

    def header_keys(self) -> List[str]:
        """Lower-cased header names in received order, without duplicates."""
        keys: List[str] = []
        for key, _ in self.headers:
            key = key.lower()
            if key not in keys:
                keys.append(key)
        return keys
