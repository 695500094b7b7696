"""Classify a binary diff tree into a build verdict.

Classification rules (deterministic):
A class is blocking if ANY of these survive filtering:
1. The class itself is incompatible and unresolved (no marker, externally visible)
2. An implemented interface is binary-incompatible
3. A field, constructor or method is incompatible and unresolved
4. An annotation reference is binary-incompatible

A class with no incompatible element at all is skipped without a deep walk.
A class marked no-external-use, accepted or ignored never blocks: the marker
resolves the class together with all of its members.

Accepted/ignored flags are OR-accumulated from every marker resolution in
the tree, including elements that are also restricted and classes that end
up blocking anyway. Flags are computed per class and folded into the run
verdict, so classes can be classified independently.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, TypeVar

from .diff_tree import (
    AnnotationRef,
    BinaryCompatibility,
    ClassDiff,
    ConstructorDiff,
    DiffElement,
    FieldDiff,
    ImplementedInterface,
    MethodDiff,
    is_incompatible_change,
)
from .markers import resolve_markers, scan_markers

logger = logging.getLogger(__name__)

B = TypeVar("B", bound=BinaryCompatibility)
E = TypeVar("E", bound=DiffElement)


@dataclass(frozen=True)
class MarkerFlags:
    """Accepted/ignored visibility flags for a subtree."""
    accepted: bool = False
    ignored: bool = False

    def merge(self, other: "MarkerFlags") -> "MarkerFlags":
        return MarkerFlags(
            accepted=self.accepted or other.accepted,
            ignored=self.ignored or other.ignored,
        )


@dataclass(frozen=True)
class ClassFinding:
    """A blocking class and the members that still block after filtering.

    ``klass`` is the original input node; the member tuples are filtered
    copies of its collections.
    """
    klass: ClassDiff
    class_level: bool  # Class itself is incompatible and unresolved
    interfaces: tuple[ImplementedInterface, ...] = ()
    fields: tuple[FieldDiff, ...] = ()
    constructors: tuple[ConstructorDiff, ...] = ()
    methods: tuple[MethodDiff, ...] = ()
    annotation_refs: tuple[AnnotationRef, ...] = ()

    @property
    def blocking_member_count(self) -> int:
        return (
            len(self.interfaces) + len(self.fields) + len(self.constructors)
            + len(self.methods) + len(self.annotation_refs)
        )


@dataclass(frozen=True)
class BuildVerdict:
    """Result of classifying one diff tree. Immutable after construction."""
    findings: tuple[ClassFinding, ...] = ()
    any_accepted: bool = False
    any_ignored: bool = False

    @property
    def blocking_classes(self) -> tuple[ClassDiff, ...]:
        """Blocking class nodes in input order (original objects)."""
        return tuple(f.klass for f in self.findings)

    def is_empty(self) -> bool:
        """True if nothing blocks the build."""
        return not self.findings


def filter_incompatible(items: Sequence[Optional[B]]) -> tuple[B, ...]:
    """Keep only binary-incompatible entries. No marker resolution."""
    return tuple(i for i in items if i is not None and not i.binary_compatible)


def filter_elements(items: Sequence[Optional[E]]) -> tuple[tuple[E, ...], MarkerFlags]:
    """Keep incompatible elements no marker resolves; collect marker flags.

    Elements that are unchanged or binary-compatible are dropped without
    marker resolution.
    """
    kept = []
    flags = MarkerFlags()
    for item in items:
        verdict = resolve_markers(item)
        if verdict is None:
            continue
        flags = flags.merge(MarkerFlags(accepted=verdict.accepted, ignored=verdict.ignored))
        if verdict.unresolved:
            kept.append(item)
    return tuple(kept), flags


def _has_incompatibility(klass: ClassDiff) -> bool:
    if is_incompatible_change(klass):
        return True
    members = (
        klass.interfaces, klass.fields, klass.constructors,
        klass.methods, klass.annotation_refs,
    )
    return any(
        m is not None and not m.binary_compatible
        for collection in members
        for m in collection
    )


def classify_class(klass: ClassDiff) -> tuple[Optional[ClassFinding], MarkerFlags]:
    """Classify one class node.

    Returns the finding (None if the class does not block) and the marker
    flags collected from the class and its members.
    """
    if not _has_incompatibility(klass):
        return None, MarkerFlags()

    # Class markers apply whenever anything in the class changed, not only
    # when the class's own compatibility broke
    no_external_use, accepted, ignored = scan_markers(klass.annotations)
    flags = MarkerFlags(accepted=accepted, ignored=ignored)

    # Members are always walked so flags cover the whole class
    interfaces = filter_incompatible(klass.interfaces)
    fields, field_flags = filter_elements(klass.fields)
    constructors, constructor_flags = filter_elements(klass.constructors)
    methods, method_flags = filter_elements(klass.methods)
    annotation_refs = filter_incompatible(klass.annotation_refs)
    flags = flags.merge(field_flags).merge(constructor_flags).merge(method_flags)

    if no_external_use:
        logger.debug("Class %s is restricted to no external use", klass.fully_qualified_name)
        return None, flags
    if accepted or ignored:
        logger.debug("Class %s is resolved by a class-level marker", klass.fully_qualified_name)
        return None, flags

    class_level = is_incompatible_change(klass)
    finding = ClassFinding(
        klass=klass,
        class_level=class_level,
        interfaces=interfaces,
        fields=fields,
        constructors=constructors,
        methods=methods,
        annotation_refs=annotation_refs,
    )
    if not (class_level or finding.blocking_member_count):
        return None, flags
    logger.debug(
        "Class %s blocks (class-level: %s, members: %d)",
        klass.fully_qualified_name, class_level, finding.blocking_member_count,
    )
    return finding, flags


def classify(classes: Optional[Iterable[ClassDiff]]) -> BuildVerdict:
    """
    Classify a sequence of class diffs into a build verdict.

    The input is read-only and may be empty or None. Blocking classes
    keep their input order.
    """
    findings = []
    flags = MarkerFlags()
    for klass in classes or ():
        if klass is None:
            continue
        finding, class_flags = classify_class(klass)
        flags = flags.merge(class_flags)
        if finding is not None:
            findings.append(finding)
    logger.debug(
        "Classified diff tree: %d blocking, accepted=%s, ignored=%s",
        len(findings), flags.accepted, flags.ignored,
    )
    return BuildVerdict(
        findings=tuple(findings),
        any_accepted=flags.accepted,
        any_ignored=flags.ignored,
    )
