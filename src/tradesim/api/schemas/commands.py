"""Pydantic schemas for the command endpoint."""

from typing import Optional

from pydantic import BaseModel, Field


class CommandRequest(BaseModel):
    """A chat message addressed to the simulator."""

    user_id: str = Field(..., min_length=1, max_length=64, description="Opaque chat user ID")
    text: str = Field(..., max_length=4096, description="Command text, e.g. '/buy AAPL 10'")
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class CommandResponse(BaseModel):
    """Reply text to send back to the user."""

    reply: str
