"""Marker resolution for a single binary-incompatible diff element.

Markers are annotations matched by fully qualified name against a small
closed table. Three facts are extracted, independently of one another:

- no_external_use: a ``Restricted`` marker names the ``NoExternalUse`` tag,
  so the element is not part of the public contract.
- accepted: an accept marker is present (the incompatibility may ship).
- ignored: an ignore marker is present (the incompatibility is disregarded).

Accept and ignore are presence-only; their arguments are never read.
A marker with no usable arguments is inert, never an error.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Generic, Iterable, Mapping, Optional, TypeVar

from .diff_tree import Annotation, DiffElement, is_incompatible_change


ANN_RESTRICTED = "org.kohsuke.accmod.Restricted"
ACC_NO_EXTERNAL_USE = "org.kohsuke.accmod.restrictions.NoExternalUse"
ANN_ACCEPT = "org.jenkinsci.tools.bce.AcceptBinaryIncompatibleChange"
ANN_IGNORE = "org.jenkinsci.tools.bce.IgnoreBinaryIncompatibleChange"
VALUE = "value"
CLASS_VALUE_TYPE = "Class"


class MarkerEffect(str, Enum):
    """What a recognized marker does to an incompatible element."""
    RESTRICTED = "RESTRICTED"  # Effect depends on the restriction tags it carries
    ACCEPT = "ACCEPT"
    IGNORE = "IGNORE"


MARKER_EFFECTS: Mapping[str, MarkerEffect] = MappingProxyType({
    ANN_RESTRICTED: MarkerEffect.RESTRICTED,
    ANN_ACCEPT: MarkerEffect.ACCEPT,
    ANN_IGNORE: MarkerEffect.IGNORE,
})


T = TypeVar("T", bound=DiffElement)


@dataclass(frozen=True)
class ElementVerdict(Generic[T]):
    """Marker facts for one element. Ephemeral: only lives during classification."""
    element: T
    no_external_use: bool = False
    accepted: bool = False
    ignored: bool = False

    @property
    def unresolved(self) -> bool:
        """True if no marker resolves the incompatibility and the element is externally visible."""
        return not (self.no_external_use or self.accepted or self.ignored)


def _element_values(annotation: Annotation):
    for element in annotation.elements:
        if element.name == VALUE:
            return element.new_values
    return ()


def class_values(annotation: Annotation) -> set[str]:
    """Class-typed values of the annotation's ``value`` element, as strings.

    Null values are skipped.
    """
    return {
        str(v.value)
        for v in _element_values(annotation)
        if v.type == CLASS_VALUE_TYPE and v.value is not None
    }


def scan_markers(annotations: Iterable[Annotation]) -> tuple[bool, bool, bool]:
    """Scan annotations once; returns (no_external_use, accepted, ignored).

    Order does not matter and repeated markers are idempotent.
    """
    no_external_use = False
    accepted = False
    ignored = False
    for annotation in annotations:
        effect = MARKER_EFFECTS.get(annotation.fully_qualified_name)
        if effect is MarkerEffect.RESTRICTED:
            no_external_use |= ACC_NO_EXTERNAL_USE in class_values(annotation)
        elif effect is MarkerEffect.ACCEPT:
            accepted = True
        elif effect is MarkerEffect.IGNORE:
            ignored = True
    return no_external_use, accepted, ignored


def resolve_markers(element: Optional[T]) -> Optional[ElementVerdict[T]]:
    """Resolve markers on an element.

    Returns None when there is nothing to resolve: the element is absent,
    unchanged, or binary-compatible.
    """
    if not is_incompatible_change(element):
        return None
    no_external_use, accepted, ignored = scan_markers(element.annotations)
    return ElementVerdict(
        element=element,
        no_external_use=no_external_use,
        accepted=accepted,
        ignored=ignored,
    )
