"""Request models for the middleware demo endpoints."""

from typing import Optional

from pydantic import BaseModel, Field, ConfigDict


class LoginAttempt(BaseModel):
    """Credentials posted to the login demo endpoint; nothing is verified."""

    username: Optional[str] = Field(default=None, description="Username to record")
    password: Optional[str] = Field(default=None, description="Accepted but never echoed or stored")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"username": "alice", "password": "secret"}
        }
    )
