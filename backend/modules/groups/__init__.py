"""
Groups module.

Bible study groups: schedule, leaders and self-service membership.

Public API:
- IGroupService: Interface for group operations
- BibleStudyGroup, MeetingTime, Leader, Member: Group models
- format_meeting_time: Display helper for meeting times
"""

from .interfaces import IGroupService
from .models import (
    DayOfWeek,
    MeetingTime,
    Leader,
    Member,
    BibleStudyGroup,
    CreateGroupRequest,
    UpdateGroupRequest,
    GroupListResponse,
    LeaderName,
    format_meeting_time,
)
from .exceptions import GroupNotFoundError, GroupMutationError, EmptyUpdateError

__all__ = [
    "IGroupService",
    "DayOfWeek",
    "MeetingTime",
    "Leader",
    "Member",
    "BibleStudyGroup",
    "CreateGroupRequest",
    "UpdateGroupRequest",
    "GroupListResponse",
    "LeaderName",
    "format_meeting_time",
    "GroupNotFoundError",
    "GroupMutationError",
    "EmptyUpdateError",
]
