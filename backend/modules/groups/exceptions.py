"""
Groups module exceptions.
"""

from typing import Optional

from shared.exceptions import NotFoundError, ExternalServiceError, ValidationError


class GroupNotFoundError(NotFoundError):
    """Raised when a group doesn't exist."""

    def __init__(self, group_id: str):
        super().__init__(
            f"Bible study group not found: {group_id}",
            code="GROUP_NOT_FOUND",
            details={"group_id": group_id},
        )


class EmptyUpdateError(ValidationError):
    """Raised when an update carries no fields."""

    def __init__(self):
        super().__init__("No fields to update", code="EMPTY_UPDATE")


class GroupMutationError(ExternalServiceError):
    """
    Raised when a group write fails after the optimistic update was rolled back.

    The message is generic. The store's own error is logged and chained
    as __cause__, never sent to the caller.
    """

    def __init__(self, action: str, group_id: Optional[str] = None):
        super().__init__(
            f"Failed to {action}. Please try again",
            service="supabase",
            code="GROUP_MUTATION_FAILED",
            details={"action": action, "group_id": group_id},
        )
