"""
Email/password and magic-link sign-in endpoints.

Phone sign-in lives in the verification module.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from api.dependencies import get_auth_service

from .interfaces import IAuthService
from .models import (
    AuthSession,
    LoginRequest,
    MagicLinkRequest,
    MagicLinkVerifyRequest,
    SignupRequest,
    VerificationEmailRequest,
)

router = APIRouter()


class MessageResponse(BaseModel):
    message: str


@router.post("/signup", response_model=AuthSession, status_code=201)
async def signup(
    request: SignupRequest,
    service: IAuthService = Depends(get_auth_service),
) -> AuthSession:
    """
    Create an account with email and password.

    When email confirmation is on the session carries no tokens until
    the emailed link is followed.
    """
    return await service.signup(request)


@router.post("/login", response_model=AuthSession)
async def login(
    request: LoginRequest,
    service: IAuthService = Depends(get_auth_service),
) -> AuthSession:
    return await service.login(request)


@router.post("/magic-link", response_model=MessageResponse, status_code=202)
async def send_magic_link(
    request: MagicLinkRequest,
    service: IAuthService = Depends(get_auth_service),
) -> MessageResponse:
    """Email a passwordless sign-in link."""
    await service.send_magic_link(request.email, request.redirect_url)
    return MessageResponse(message="Check your email for a sign-in link")


@router.post("/magic-link/verify", response_model=AuthSession)
async def verify_magic_link(
    request: MagicLinkVerifyRequest,
    service: IAuthService = Depends(get_auth_service),
) -> AuthSession:
    return await service.complete_magic_link(request.email, request.token)


@router.post("/verification-email", response_model=MessageResponse, status_code=202)
async def resend_verification_email(
    request: VerificationEmailRequest,
    service: IAuthService = Depends(get_auth_service),
) -> MessageResponse:
    await service.resend_verification_email(request.email)
    return MessageResponse(message="Verification email sent")
