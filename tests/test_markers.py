"""Tests for marker resolution on single diff elements."""

from bcegate.codes import ChangeStatus
from bcegate.kernel.diff_tree import Annotation, AnnotationElement, AnnotationValue
from bcegate.kernel.markers import (
    ACC_NO_EXTERNAL_USE,
    ANN_RESTRICTED,
    MARKER_EFFECTS,
    MarkerEffect,
    class_values,
    resolve_markers,
    scan_markers,
)

from builders import accept_marker, ignore_marker, method, restricted_marker


def test_nothing_to_resolve_for_compatible_or_unchanged_elements():
    assert resolve_markers(None) is None
    assert resolve_markers(method(compatible=True)) is None
    assert resolve_markers(method(status=ChangeStatus.UNCHANGED)) is None


def test_unmarked_incompatible_element_is_unresolved():
    m = method()
    verdict = resolve_markers(m)
    assert verdict is not None
    assert verdict.element is m
    assert verdict.unresolved
    assert not (verdict.no_external_use or verdict.accepted or verdict.ignored)


def test_accept_and_ignore_are_presence_only():
    # Arguments on accept/ignore markers are never read
    noisy_accept = Annotation(
        fully_qualified_name=accept_marker().fully_qualified_name,
        elements=(AnnotationElement(name="value", new_values=(AnnotationValue(type="String", value="why"),)),),
    )
    accepted = resolve_markers(method(annotations=[noisy_accept]))
    ignored = resolve_markers(method(annotations=[ignore_marker()]))
    assert accepted.accepted and not accepted.ignored and not accepted.unresolved
    assert ignored.ignored and not ignored.accepted and not ignored.unresolved


def test_restricted_requires_no_external_use_tag():
    other = resolve_markers(method(annotations=[restricted_marker("org.kohsuke.accmod.restrictions.DoNotUse")]))
    assert not other.no_external_use
    assert other.unresolved

    restricted = resolve_markers(method(annotations=[restricted_marker()]))
    assert restricted.no_external_use
    assert not restricted.unresolved


def test_restricted_tag_among_several_values():
    marker = restricted_marker("org.kohsuke.accmod.restrictions.Beta", ACC_NO_EXTERNAL_USE)
    assert scan_markers([marker]) == (True, False, False)


def test_restricted_marker_without_arguments_is_inert():
    bare = Annotation(fully_qualified_name=ANN_RESTRICTED)
    empty = Annotation(
        fully_qualified_name=ANN_RESTRICTED,
        elements=(AnnotationElement(name="value"),),
    )
    assert scan_markers([bare, empty]) == (False, False, False)


def test_class_values_skip_nulls_and_other_types():
    marker = Annotation(
        fully_qualified_name=ANN_RESTRICTED,
        elements=(
            AnnotationElement(name="message", new_values=(AnnotationValue(type="Class", value="x.Y"),)),
            AnnotationElement(name="value", new_values=(
                AnnotationValue(type="Class", value=None),
                AnnotationValue(type="String", value=ACC_NO_EXTERNAL_USE),
                AnnotationValue(type="Class", value="a.B"),
            )),
        ),
    )
    assert class_values(marker) == {"a.B"}


def test_markers_are_independent_and_idempotent():
    annotations = [ignore_marker(), restricted_marker(), accept_marker(), accept_marker(), ignore_marker()]
    assert scan_markers(annotations) == (True, True, True)
    assert scan_markers(reversed(annotations)) == (True, True, True)


def test_unknown_annotations_are_ignored():
    assert scan_markers([Annotation(fully_qualified_name="java.lang.Deprecated")]) == (False, False, False)


def test_marker_table_is_closed():
    assert set(MARKER_EFFECTS.values()) == set(MarkerEffect)
    assert MARKER_EFFECTS[ANN_RESTRICTED] is MarkerEffect.RESTRICTED
