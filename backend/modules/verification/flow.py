"""
Phone verification wizard.

A flow walks one caller through phone -> phone-verification ->
(name-input) -> complete. Each flow owns its SessionManager; the
registry closes it when the flow is discarded.
"""

import logging
import time
import uuid
from typing import Callable, Optional

from shared.exceptions import HubError
from modules.auth.models import AuthSession
from modules.auth.session import SessionManager
from modules.profiles.interfaces import IProfileService

from .interfaces import IVerificationProvider
from .models import ConfirmationHandle, FlowStatus, FlowStep
from .exceptions import FlowNotFoundError, InvalidTransitionError
from .validators import normalize_phone_number, validate_full_name, validate_verification_code

logger = logging.getLogger(__name__)


class PhoneVerificationFlow:
    """
    State machine for one phone sign-in.

    Failed actions leave the flow in the step it was in and record a
    user-facing message in `error` (or `name_error` for the name step).
    """

    def __init__(
        self,
        provider: IVerificationProvider,
        profiles: IProfileService,
        sessions: SessionManager,
        flow_id: Optional[str] = None,
    ):
        self.id = flow_id or uuid.uuid4().hex
        self.step = FlowStep.PHONE
        self.phone_number: Optional[str] = None
        self.code: Optional[str] = None
        self.name: Optional[str] = None
        self.error: Optional[str] = None
        self.name_error: Optional[str] = None
        self._handle: Optional[ConfirmationHandle] = None
        self._provider = provider
        self._profiles = profiles
        self._sessions = sessions

    @property
    def sessions(self) -> SessionManager:
        return self._sessions

    @property
    def session(self) -> Optional[AuthSession]:
        return self._sessions.current

    @property
    def is_complete(self) -> bool:
        return self.step == FlowStep.COMPLETE

    def status(self) -> FlowStatus:
        return FlowStatus(
            flow_id=self.id,
            step=self.step,
            phone_number=self.phone_number,
            error=self.error,
            name_error=self.name_error,
            session=self.session if self.is_complete else None,
        )

    async def submit_phone(self, raw_phone_number: str) -> FlowStatus:
        """
        Validate the number and ask the provider to send a code.

        Raises:
            InvalidPhoneNumberError: Before any provider call
            CodeRequestError: If the provider refuses
        """
        self._require(FlowStep.PHONE, "submit a phone number")
        self.error = None

        try:
            phone_number = normalize_phone_number(raw_phone_number)
            handle = await self._provider.send_code(phone_number)
        except HubError as e:
            self.error = e.message
            raise

        self.phone_number = phone_number
        self._handle = handle
        self.step = FlowStep.PHONE_VERIFICATION
        return self.status()

    async def submit_code(self, code: str) -> FlowStatus:
        """
        Redeem the code. A wrong code keeps the challenge so the caller can retry.

        Raises:
            InvalidCodeFormatError: Unless the code is six digits
            InvalidCodeError: If the provider rejects the code
        """
        self._require(FlowStep.PHONE_VERIFICATION, "submit a code")
        self.error = None

        try:
            code = validate_verification_code(code)
            session = await self._provider.verify_code(self._handle, code)
            user = await self._sessions.establish(session)
        except HubError as e:
            self.error = e.message
            raise

        self.code = code
        if user.display_name:
            self.step = FlowStep.COMPLETE
            logger.info(f"Phone sign-in complete for {user.id}")
        else:
            self.step = FlowStep.NAME_INPUT
        return self.status()

    async def submit_name(self, name: str) -> FlowStatus:
        """
        Record a first-time user's display name and finish.

        Raises:
            InvalidNameError: Unless the name has a first and last part
        """
        self._require(FlowStep.NAME_INPUT, "submit a name")
        self.name_error = None

        try:
            display_name = validate_full_name(name)
        except HubError as e:
            self.name_error = e.message
            raise

        user = self._sessions.user
        try:
            await self._provider.update_display_name(user.id, display_name)
            await self._profiles.set_display_name(
                user.id, display_name, phone_number=user.phone or self.phone_number
            )
        except HubError as e:
            self.name_error = e.message
            raise

        self._sessions.update_user(display_name=display_name)
        self.name = display_name
        self.step = FlowStep.COMPLETE
        logger.info(f"Phone sign-in complete for new user {user.id}")
        return self.status()

    def back(self) -> FlowStatus:
        """
        Step back one screen.

        Leaving phone-verification drops the code, the challenge and any
        session; leaving name-input drops the name.
        """
        if self.step == FlowStep.PHONE_VERIFICATION:
            self.step = FlowStep.PHONE
            self.code = None
            self._handle = None
            self._sessions.clear()
        elif self.step == FlowStep.NAME_INPUT:
            self.step = FlowStep.PHONE_VERIFICATION
            self.name = None
            self.name_error = None
        else:
            raise InvalidTransitionError("go back", self.step.value)

        self.error = None
        return self.status()

    def close(self) -> None:
        self._handle = None
        self._sessions.close()

    def _require(self, step: FlowStep, action: str) -> None:
        if self.step != step:
            raise InvalidTransitionError(action, self.step.value)


class FlowRegistry:
    """
    In-process store of live verification flows, keyed by flow ID.

    Flows older than ttl_seconds are closed and dropped whenever the
    registry is used. When max_flows are live, starting another flow
    closes the oldest one.
    """

    def __init__(
        self,
        flow_factory: Callable[[], PhoneVerificationFlow],
        ttl_seconds: Optional[float] = 600.0,
        max_flows: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._factory = flow_factory
        self._ttl = ttl_seconds
        self._max_flows = max_flows
        self._clock = clock
        self._flows: dict[str, PhoneVerificationFlow] = {}
        self._started_at: dict[str, float] = {}

    def __len__(self) -> int:
        return len(self._flows)

    def __contains__(self, flow_id: str) -> bool:
        return flow_id in self._flows

    def create(self) -> PhoneVerificationFlow:
        self.evict_expired()
        if self._max_flows is not None:
            while self._flows and len(self._flows) >= self._max_flows:
                oldest = next(iter(self._flows))
                logger.warning(f"Too many live verification flows, dropping {oldest}")
                self.discard(oldest)

        flow = self._factory()
        self._flows[flow.id] = flow
        self._started_at[flow.id] = self._clock()
        return flow

    def get(self, flow_id: str) -> PhoneVerificationFlow:
        """
        Raises:
            FlowNotFoundError: If no live flow has this ID
        """
        self.evict_expired()
        flow = self._flows.get(flow_id)
        if flow is None:
            raise FlowNotFoundError(flow_id)
        return flow

    def evict_expired(self) -> int:
        """
        Close and drop flows older than the TTL.

        Returns:
            Number of flows dropped.
        """
        if self._ttl is None:
            return 0
        cutoff = self._clock() - self._ttl
        expired = [fid for fid, started in self._started_at.items() if started <= cutoff]
        for flow_id in expired:
            self.discard(flow_id)
        if expired:
            logger.info(f"Dropped {len(expired)} expired verification flows")
        return len(expired)

    def discard(self, flow_id: str) -> None:
        self._started_at.pop(flow_id, None)
        flow = self._flows.pop(flow_id, None)
        if flow is not None:
            flow.close()

    def close(self) -> None:
        for flow_id in list(self._flows):
            self.discard(flow_id)
