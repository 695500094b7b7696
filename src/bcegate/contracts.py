"""Public result models for bcegate package."""

from typing import List, Optional
from pydantic import BaseModel, Field

from bcegate.codes import GateStatus


class MemberEntry(BaseModel):
    """A blocking member of a class."""
    kind: str  # "interface" | "field" | "constructor" | "method" | "annotation"
    name: str
    change_status: str
    compatibility_changes: List[str] = Field(default_factory=list)


class BlockingClassEntry(BaseModel):
    """A class that blocks the build."""
    fully_qualified_name: str
    change_status: str
    class_level: bool  # The class itself is incompatible and unmarked
    compatibility_changes: List[str] = Field(default_factory=list)
    members: List[MemberEntry] = Field(default_factory=list)  # input order, grouped by kind


class GateResult(BaseModel):
    """Outcome of one gate run."""
    status: GateStatus
    ok: bool  # False only when blocking classes exist
    blocking_classes: List[BlockingClassEntry] = Field(default_factory=list)  # input order
    any_accepted: bool = False
    any_ignored: bool = False
    warnings: List[str] = Field(default_factory=list)
    skipped_reason: Optional[str] = None
