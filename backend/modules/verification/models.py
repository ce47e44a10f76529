"""
Verification module data models.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from modules.auth.models import AuthSession


class FlowStep(str, Enum):
    """Steps of the phone verification wizard."""

    PHONE = "phone"                             # Collect the phone number
    PHONE_VERIFICATION = "phone-verification"   # Collect the 6-digit code
    NAME_INPUT = "name-input"                   # First-time identities only
    COMPLETE = "complete"                       # Signed in


class ConfirmationHandle(BaseModel):
    """
    Challenge issued by the provider when a code is sent.

    Redeeming it is the provider's business; expiry and single use are
    enforced on its side.
    """

    phone_number: str
    issued_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    model_config = {"frozen": True}


class StartFlowRequest(BaseModel):
    """Optionally submit the phone number when starting a flow."""

    phone_number: Optional[str] = None


class PhoneSubmitRequest(BaseModel):
    phone_number: str


class CodeSubmitRequest(BaseModel):
    code: str


class NameSubmitRequest(BaseModel):
    name: str


class FlowStatus(BaseModel):
    """Snapshot of a flow returned to the caller after every action."""

    flow_id: str
    step: FlowStep
    phone_number: Optional[str] = None
    error: Optional[str] = None
    name_error: Optional[str] = None
    session: Optional[AuthSession] = Field(
        None,
        description="Issued session, present once the flow is complete",
    )
