"""
JWT Authentication middleware.

Validates Supabase JWT tokens through the auth service and extracts the
user, including the role from the token's signed claims.
"""

from typing import Callable, Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from shared.config import get_settings
from shared.exceptions import AuthenticationError
from shared.models import AuthenticatedUser
from modules.auth.interfaces import IAuthService
from modules.auth.permissions import PERMISSION_NAMES, has_permission

from ..dependencies import get_auth_service

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


class AuthError(HTTPException):
    """Authentication error with consistent format."""
    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


async def authenticate(token: str, auth: IAuthService) -> AuthenticatedUser:
    """
    Validate a bearer token.

    Raises:
        AuthError: If the server has no JWT secret or the token is invalid or expired
    """
    if not get_settings().supabase_jwt_secret:
        raise AuthError("Server authentication not configured")

    try:
        return await auth.validate_token(token)
    except AuthenticationError as e:
        raise AuthError(e.message)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: IAuthService = Depends(get_auth_service),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Use this for endpoints that require a logged-in user.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    if credentials is None:
        raise AuthError("Missing authorization header")

    return await authenticate(credentials.credentials, auth)


def require_permission(permission: str) -> Callable:
    """
    Build a dependency that requires a role permission.

    Usage:
        @router.get("/leaders")
        async def pick(user: AuthenticatedUser = Depends(require_permission("can_create_groups"))):
            ...
    """
    if permission not in PERMISSION_NAMES:
        raise ValueError(f"Unknown permission: {permission}")

    async def dependency(
        user: AuthenticatedUser = Depends(get_current_user),
    ) -> AuthenticatedUser:
        if not has_permission(user.role, permission):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Insufficient permissions. Required: {permission}",
            )
        return user

    return dependency

