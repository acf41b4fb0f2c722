"""Type definitions for API request/response validation"""

from typing import Optional

from pydantic import BaseModel


class StepEvent(BaseModel):
    """Step event delivered by webhook instead of pub/sub"""
    step_id: str
    event_type: Optional[str] = None


class EventResponse(BaseModel):
    """Outcome of dispatching one step event"""
    step_id: str
    status: str  # resulting step status, or "ignored"
    output: Optional[str] = None
