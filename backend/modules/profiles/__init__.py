"""
Profiles module.

Private user profiles and their public projection.

Public API:
- IProfileService: Interface for profile operations
- UserProfile, PublicProfile: Profile records
"""

from .interfaces import IProfileService
from .models import UserProfile, PublicProfile, UpdateDisplayNameRequest, ProfileListResponse
from .exceptions import ProfileNotFoundError

__all__ = [
    "IProfileService",
    "UserProfile",
    "PublicProfile",
    "UpdateDisplayNameRequest",
    "ProfileListResponse",
    "ProfileNotFoundError",
]
