"""
Base repository class for document store access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and providing shared utilities for row mapping.
"""

from datetime import datetime, timezone
from typing import Any, Optional, TypeVar, Generic
from supabase import Client


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints

    Subclasses should implement domain-specific data access methods
    and handle dict-to-Pydantic model mapping internally.

    Example:
        class GroupRepository(BaseRepository[BibleStudyGroup]):
            def get_by_id(self, group_id: str) -> Optional[BibleStudyGroup]:
                result = self._db.table("bible_study_groups").select("*").eq("id", group_id).execute()
                row = self._first_row(result.data)
                return self._map_to_group(row) if row else None
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    @staticmethod
    def _first_row(rows: Optional[list[dict[str, Any]]]) -> Optional[dict[str, Any]]:
        """Return the first row of a result set, or None when it is empty."""
        if not rows:
            return None
        return rows[0]

    @staticmethod
    def _timestamp() -> str:
        """Current UTC time in the ISO format the store expects."""
        return datetime.now(timezone.utc).isoformat()
