"""Deduplicating collection of discovered servers."""

from typing import Iterator

from .models import ServerRecord


class ResultRegistry:
    """Set of ServerRecords collected during one discovery call.

    Records are deduplicated by structural equality. The registry only
    grows; it is owned by a single session thread and is not locked.
    """

    def __init__(self):
        self._records: set[ServerRecord] = set()

    def add(self, record: ServerRecord) -> bool:
        """Add a record.

        Returns:
            True if the record was new, False if an equal one was already held.
        """
        if record in self._records:
            return False
        self._records.add(record)
        return True

    def records(self) -> set[ServerRecord]:
        """Copy of the collected records."""
        return set(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ServerRecord]:
        return iter(self._records)

    def __contains__(self, record: object) -> bool:
        return record in self._records
