"""Registry of named records that relationship fields refer to."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from draftschema.errors import DuplicateNameError, UnknownReferenceError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from draftschema.types import RecordType

logger = logging.getLogger(__name__)

_MAX_NAMES_IN_ERROR = 10  # Maximum number of names to show in error messages


class Registry:
    """Name -> record lookup.

    Pointers and iterators store only the target's name, so records can refer
    to each other (or to themselves) without building a cyclic object graph.
    The registry resolves those names when the shape is actually needed.
    """

    def __init__(self) -> None:
        self._records: dict[str, RecordType] = {}

    def register(self, record: RecordType) -> RecordType:
        """Register ``record`` under its name.

        Re-registering an equal record is a no-op.

        Raises:
            DuplicateNameError: If a different record already has the name

        """
        name = record.name
        assert name is not None  # records are always named
        if (existing := self._records.get(name)) is not None and existing != record:
            msg = f"Record '{name}' is already registered with a different shape"
            raise DuplicateNameError(msg)
        self._records[name] = record
        logger.debug("registered record %s", name)
        return record

    def resolve(self, name: str, *, draft: bool = False) -> RecordType:
        """Look up the strict (or draft) record registered as ``name``.

        Raises:
            UnknownReferenceError: If no record has that name

        """
        record = self._records.get(name)
        if record is None:
            available = sorted(self._records)[:_MAX_NAMES_IN_ERROR]
            suffix = "..." if len(self._records) > _MAX_NAMES_IN_ERROR else ""
            msg = f"Unknown record '{name}'. Registered records: {available}{suffix}"
            raise UnknownReferenceError(msg)
        return record.draft if draft else record

    def __contains__(self, name: object) -> bool:
        return name in self._records

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)
