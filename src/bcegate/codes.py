"""Status code constants for bcegate.

These constants prevent stringly-typed status values in the diff tree
and in gate results.
"""

from enum import Enum


class ChangeStatus(str, Enum):
    """Structural change status of a diff-tree element, as reported by the comparator."""

    NEW = "NEW"
    REMOVED = "REMOVED"
    UNCHANGED = "UNCHANGED"
    MODIFIED = "MODIFIED"


class GateStatus(str, Enum):
    """Outcome of one gate run."""

    # Blocking
    BLOCKED = "BLOCKED"

    # Non-blocking
    PASSED = "PASSED"
    PASSED_WITH_WARNINGS = "PASSED_WITH_WARNINGS"
    SKIPPED = "SKIPPED"
