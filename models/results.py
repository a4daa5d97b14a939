"""Operation results returned by entity and store mutations.

Mutations never raise for domain-rule violations; they hand back either an
``Ok`` carrying a payload or an ``Err`` tagged with an ``ErrorKind``. The
command layer flattens both into the ``{success, message, ...}`` dicts the
outer surfaces expect.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, ClassVar, Union


class ErrorKind(str, enum.Enum):
    NOT_FOUND = "not_found"
    INVALID_ARGUMENT = "invalid_argument"
    INVALID_TRANSITION = "invalid_transition"
    DOWNGRADE = "downgrade"
    VACANT_TITLE = "vacant_title"
    ROSTER_EMPTY = "roster_empty"
    ROSTER_FULL = "roster_full"
    DUPLICATE = "duplicate"
    PROTECTED = "protected"
    IO_ERROR = "io_error"
    PARSE_ERROR = "parse_error"
    INVALID_DATA = "invalid_data"


@dataclass(frozen=True)
class Ok:
    """Successful operation with an optional payload."""

    message: str
    data: dict[str, Any] = field(default_factory=dict)

    success: ClassVar[bool] = True

    def to_dict(self) -> dict[str, Any]:
        return {"success": True, "message": self.message, **self.data}


@dataclass(frozen=True)
class Err:
    """Rejected operation. Nothing was mutated."""

    kind: ErrorKind
    message: str

    success: ClassVar[bool] = False

    def to_dict(self) -> dict[str, Any]:
        return {"success": False, "message": self.message, "error": self.kind.value}


Result = Union[Ok, Err]
