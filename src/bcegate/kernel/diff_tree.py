"""Pydantic models for the binary diff tree produced by an external comparator.

The tree is organized class -> member kind -> member. Every node is a
read-only snapshot: models are frozen and collections are tuples, so the
classifier can only filter and copy references, never mutate.

Two capability protocols describe what the classifier needs from a node:

- ``BinaryCompatibility``: change status + binary compatibility
  (interfaces, annotation references).
- ``DiffElement``: the above plus attached marker annotations
  (classes, fields, constructors, methods).
"""

from typing import Any, Literal, Optional, Protocol, Sequence, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from bcegate.codes import ChangeStatus


class AnnotationValue(BaseModel):
    """A single value of an annotation element (e.g. one entry of ``value = {...}``)."""
    type: str  # "String" | "Class" | "Enum" | "Annotation" | "Array" | "Number" | ...
    value: Any = None

    model_config = ConfigDict(frozen=True, extra="ignore")


class AnnotationElement(BaseModel):
    """A named element of an annotation, with its values in the new binary."""
    name: str
    new_values: tuple[AnnotationValue, ...] = ()

    model_config = ConfigDict(frozen=True, extra="ignore")


class Annotation(BaseModel):
    """A marker annotation attached to a class or member, keyed by fully qualified name."""
    fully_qualified_name: str
    elements: tuple[AnnotationElement, ...] = ()

    model_config = ConfigDict(frozen=True, extra="ignore")


@runtime_checkable
class BinaryCompatibility(Protocol):
    """Narrow capability: change status and binary compatibility."""

    @property
    def change_status(self) -> ChangeStatus: ...

    @property
    def binary_compatible(self) -> bool: ...


@runtime_checkable
class DiffElement(BinaryCompatibility, Protocol):
    """Full capability: also carries marker annotations."""

    @property
    def annotations(self) -> Sequence[Annotation]: ...


class _Node(BaseModel):
    change_status: ChangeStatus
    binary_compatible: bool = True
    compatibility_changes: tuple[str, ...] = Field(
        default=(),
        description="Comparator change codes (e.g. METHOD_REMOVED), carried into reports"
    )

    model_config = ConfigDict(frozen=True, extra="ignore")


class _AnnotatedNode(_Node):
    annotations: tuple[Annotation, ...] = ()


class ImplementedInterface(_Node):
    """A supertype interface reference of a class."""
    fully_qualified_name: str


class AnnotationRef(_Node):
    """An annotation change entry on a class (the annotation itself changed)."""
    fully_qualified_name: str


class FieldDiff(_AnnotatedNode):
    """A field of a class."""
    name: str
    type: Optional[str] = None


class ConstructorDiff(_AnnotatedNode):
    """A constructor of a class."""
    name: str
    parameters: tuple[str, ...] = ()


class MethodDiff(_AnnotatedNode):
    """A method of a class."""
    name: str
    parameters: tuple[str, ...] = ()
    return_type: Optional[str] = None


class ClassDiff(_AnnotatedNode):
    """One top-level node of the diff tree.

    ``binary_compatible`` describes the class's own signature (supertypes,
    modifiers, removal), not an aggregate over its members.
    """
    fully_qualified_name: str
    interfaces: tuple[ImplementedInterface, ...] = ()
    fields: tuple[FieldDiff, ...] = ()
    constructors: tuple[ConstructorDiff, ...] = ()
    methods: tuple[MethodDiff, ...] = ()
    annotation_refs: tuple[AnnotationRef, ...] = ()


class DiffDocument(BaseModel):
    """Comparator output document: an ordered sequence of class diffs."""
    format: Literal["bcegate.diff"] = "bcegate.diff"
    version: Literal["1"] = "1"
    classes: tuple[ClassDiff, ...] = ()

    model_config = ConfigDict(frozen=True, extra="forbid")


def is_incompatible_change(node: Optional[BinaryCompatibility]) -> bool:
    """True if the node is structurally changed and binary-incompatible."""
    return (
        node is not None
        and node.change_status != ChangeStatus.UNCHANGED
        and not node.binary_compatible
    )


def describe_member(node: Any) -> str:
    """Short human-readable signature of a member node."""
    if isinstance(node, MethodDiff):
        signature = f"{node.name}({', '.join(node.parameters)})"
        return f"{node.return_type} {signature}" if node.return_type else signature
    if isinstance(node, ConstructorDiff):
        return f"{node.name}({', '.join(node.parameters)})"
    if isinstance(node, FieldDiff):
        return f"{node.type} {node.name}" if node.type else node.name
    return getattr(node, "fully_qualified_name", repr(node))
