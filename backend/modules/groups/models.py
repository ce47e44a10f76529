"""
Groups module data models.

These models define the bible study group aggregate and its parts.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, field_validator


class DayOfWeek(str, Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"


ALLOWED_MINUTES = (0, 15, 30, 45)


class MeetingTime(BaseModel):
    """A recurring weekly meeting, stored on a 24-hour clock."""

    day_of_week: DayOfWeek
    hour: int = Field(..., ge=0, le=23, description="Hour, 0-23")
    minute: int = Field(default=0, description="Minute, one of 0, 15, 30, 45")

    @field_validator("minute")
    @classmethod
    def minute_on_quarter_hour(cls, value: int) -> int:
        if value not in ALLOWED_MINUTES:
            raise ValueError("minute must be one of 0, 15, 30, 45")
        return value

    @classmethod
    def from_12_hour(
        cls,
        day_of_week: DayOfWeek,
        hour: int,
        minute: int,
        period: str,
    ) -> "MeetingTime":
        """
        Build from a 12-hour clock value, e.g. (7, "PM") -> 19, (12, "AM") -> 0.

        Raises:
            ValueError: If hour is outside 1-12 or period is not AM/PM
        """
        if not 1 <= hour <= 12:
            raise ValueError("hour must be between 1 and 12")
        period = period.upper()
        if period not in ("AM", "PM"):
            raise ValueError("period must be AM or PM")

        hour24 = hour % 12
        if period == "PM":
            hour24 += 12
        return cls(day_of_week=day_of_week, hour=hour24, minute=minute)


def format_meeting_time(meeting_time: MeetingTime) -> str:
    """Render a meeting time for display, e.g. "Monday at 7:00 PM"."""
    hour = meeting_time.hour
    if hour == 0:
        hour12 = 12
    elif hour > 12:
        hour12 = hour - 12
    else:
        hour12 = hour
    period = "PM" if hour >= 12 else "AM"
    day = meeting_time.day_of_week.value
    return f"{day} at {hour12}:{meeting_time.minute:02d} {period}"


class Leader(BaseModel):
    """Snapshot of a leader embedded in a group."""

    id: str
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None


class Member(BaseModel):
    user_id: str
    joined_at: Optional[datetime] = None


class BibleStudyGroup(BaseModel):
    """A bible study group with its leaders, schedule and members."""

    id: str
    name: str
    description: str = ""
    location: str = ""
    leaders: list[Leader] = Field(default_factory=list)
    meeting_times: list[MeetingTime] = Field(default_factory=list)
    members: list[Member] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def has_member(self, user_id: str) -> bool:
        return any(m.user_id == user_id for m in self.members)

    def with_member(self, user_id: str, joined_at: datetime) -> "BibleStudyGroup":
        """Copy with user_id added; unchanged if already a member."""
        if self.has_member(user_id):
            return self
        member = Member(user_id=user_id, joined_at=joined_at)
        return self.model_copy(update={"members": [*self.members, member]})

    def without_member(self, user_id: str) -> "BibleStudyGroup":
        """Copy with every entry for user_id removed."""
        members = [m for m in self.members if m.user_id != user_id]
        return self.model_copy(update={"members": members})


class CreateGroupRequest(BaseModel):
    """Request to create a new group."""

    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(default="", max_length=5000)
    location: str = Field(default="", max_length=500)
    leaders: list[Leader] = Field(default_factory=list)
    meeting_times: list[MeetingTime] = Field(
        ...,
        min_length=1,
        description="At least one meeting time is required",
    )

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value


class UpdateGroupRequest(BaseModel):
    """Partial update. Members are changed only through join and leave."""

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=5000)
    location: Optional[str] = Field(None, max_length=500)
    leaders: Optional[list[Leader]] = None
    meeting_times: Optional[list[MeetingTime]] = Field(None, min_length=1)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value


class GroupListResponse(BaseModel):
    items: list[BibleStudyGroup]
    total: int


class LeaderName(BaseModel):
    """A leader's display name, resolved from the public profile when available."""

    id: str
    name: str
