"""
Session manager.

Holds the session produced by one sign-in flow. It is created by whoever
drives the flow, passed to the code that needs the signed-in identity,
and closed when that owner is done with it; there is no process-wide
current user.
"""

import logging
from typing import Callable, Optional

from shared.models import AuthenticatedUser, UserRole

from .interfaces import IAuthService
from .models import AuthSession
from .permissions import RolePermissions, get_permissions

logger = logging.getLogger(__name__)

SessionListener = Callable[[Optional[AuthSession]], None]


class SessionManager:
    """
    Explicitly constructed, explicitly disposed holder of one auth session.

    The identity stored here is always re-derived from the access token's
    signed claims, so the role cannot drift from what the provider issued.
    """

    def __init__(self, auth: IAuthService) -> None:
        self._auth = auth
        self._session: Optional[AuthSession] = None
        self._listeners: list[SessionListener] = []
        self._closed = False

    @property
    def current(self) -> Optional[AuthSession]:
        return self._session

    @property
    def user(self) -> Optional[AuthenticatedUser]:
        return self._session.user if self._session else None

    @property
    def role(self) -> UserRole:
        user = self.user
        return user.role if user else UserRole.USER

    @property
    def permissions(self) -> RolePermissions:
        return get_permissions(self.role)

    @property
    def closed(self) -> bool:
        return self._closed

    async def establish(self, session: AuthSession) -> AuthenticatedUser:
        """
        Adopt a freshly issued session.

        Raises:
            RuntimeError: If the manager has been closed
            ValueError: If the session carries no access token
            AuthenticationError: If the access token does not validate
        """
        if self._closed:
            raise RuntimeError("Session manager is closed")
        if not session.access_token:
            raise ValueError("Session has no access token")

        user = await self._auth.validate_token(session.access_token)
        # Keep contact details from the provider record when the token omits them
        user = user.model_copy(
            update={
                "display_name": user.display_name or session.user.display_name,
                "phone": user.phone or session.user.phone,
                "email": user.email or session.user.email,
            }
        )
        self._session = session.model_copy(update={"user": user})
        self._notify()
        return user

    def update_user(self, **changes) -> None:
        """Apply local changes to the held identity (e.g. a new display name)."""
        if self._session is None:
            return
        user = self._session.user.model_copy(update=changes)
        self._session = self._session.model_copy(update={"user": user})
        self._notify()

    def on_change(self, listener: SessionListener) -> Callable[[], None]:
        """
        Subscribe to session changes.

        Returns:
            A function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def clear(self) -> None:
        if self._session is not None:
            self._session = None
            self._notify()

    def close(self) -> None:
        """Drop the session and all listeners. Safe to call more than once."""
        if self._closed:
            return
        self.clear()
        self._listeners.clear()
        self._closed = True

    def __enter__(self) -> "SessionManager":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._session)
