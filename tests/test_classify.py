"""Tests for classifying diff trees into build verdicts."""

from bcegate.codes import ChangeStatus
from bcegate.kernel.classify import BuildVerdict, MarkerFlags, classify, classify_class, filter_elements
from bcegate.kernel.diff_tree import AnnotationRef, ImplementedInterface

from builders import (
    accept_marker,
    constructor,
    field,
    ignore_marker,
    klass,
    method,
    restricted_marker,
)


def test_scenario_a_unmarked_incompatible_method_blocks():
    c = klass(methods=[method()])
    verdict = classify([c])
    assert verdict.blocking_classes == (c,)
    assert verdict.blocking_classes[0] is c
    assert not verdict.any_accepted
    assert not verdict.any_ignored


def test_scenario_b_ignored_method_does_not_block():
    verdict = classify([klass(methods=[method(annotations=[ignore_marker()])])])
    assert verdict.blocking_classes == ()
    assert verdict.any_ignored
    assert not verdict.any_accepted


def test_scenario_c_accepted_field_unmarked_method_still_blocks():
    blocking_method = method("close")
    c = klass(fields=[field(annotations=[accept_marker()])], methods=[blocking_method])
    verdict = classify([c])
    assert verdict.blocking_classes == (c,)
    assert verdict.any_accepted
    finding = verdict.findings[0]
    assert finding.fields == ()
    assert finding.methods == (blocking_method,)
    assert finding.methods[0] is blocking_method


def test_scenario_d_no_incompatible_members():
    c = klass(
        methods=[method(compatible=True, annotations=[accept_marker()])],
        fields=[field(status=ChangeStatus.NEW, compatible=True)],
    )
    verdict = classify([c])
    assert verdict == BuildVerdict()
    assert verdict.is_empty()


def test_scenario_e_class_level_incompatibility_alone_blocks():
    c = klass(compatible=False, status=ChangeStatus.MODIFIED)
    verdict = classify([c])
    assert verdict.blocking_classes == (c,)
    assert verdict.findings[0].class_level
    assert verdict.findings[0].blocking_member_count == 0


def test_members_covered_by_no_external_use_do_not_block_or_flag():
    c = klass(
        methods=[method(annotations=[restricted_marker()])],
        constructors=[constructor(annotations=[restricted_marker()])],
    )
    verdict = classify([c])
    assert verdict.blocking_classes == ()
    assert not verdict.any_accepted
    assert not verdict.any_ignored


def test_no_external_use_with_accept_still_flags_accepted():
    c = klass(methods=[method(annotations=[restricted_marker(), accept_marker()])])
    verdict = classify([c])
    assert verdict.blocking_classes == ()
    assert verdict.any_accepted


def test_accept_marker_only_removes_marked_member():
    before = klass(methods=[method("a"), method("b")])
    after = klass(methods=[method("a", annotations=[accept_marker()]), method("b")])

    v_before = classify([before])
    v_after = classify([after])
    assert [m.name for m in v_before.findings[0].methods] == ["a", "b"]
    assert [m.name for m in v_after.findings[0].methods] == ["b"]
    assert not v_before.any_accepted
    assert v_after.any_accepted


def test_flags_accumulate_from_blocking_and_non_blocking_classes():
    accepted_only = klass("org.example.A", methods=[method(annotations=[accept_marker()])])
    blocking = klass("org.example.B", fields=[field(annotations=[ignore_marker()])], methods=[method()])
    verdict = classify([accepted_only, blocking])
    assert verdict.blocking_classes == (blocking,)
    assert verdict.any_accepted
    assert verdict.any_ignored


def test_flags_do_not_depend_on_order():
    classes = [
        klass("org.example.A", methods=[method(annotations=[ignore_marker()])]),
        klass("org.example.B", methods=[method()]),
        klass("org.example.C", fields=[field(annotations=[accept_marker()])]),
    ]
    forward = classify(classes)
    backward = classify(list(reversed(classes)))
    assert (forward.any_accepted, forward.any_ignored) == (backward.any_accepted, backward.any_ignored)


def test_blocking_classes_keep_input_order():
    names = ["org.example.Z", "org.example.A", "org.example.M"]
    classes = [klass(n, methods=[method()]) for n in names]
    classes.insert(1, klass("org.example.Clean"))
    verdict = classify(classes)
    assert [c.fully_qualified_name for c in verdict.blocking_classes] == names


def test_classification_is_idempotent():
    classes = [
        klass("org.example.A", methods=[method(), method("b", annotations=[accept_marker()])]),
        klass("org.example.B", compatible=False, annotations=[ignore_marker()]),
    ]
    assert classify(classes) == classify(classes)


def test_input_is_not_mutated():
    c = klass(methods=[method(annotations=[accept_marker()]), method("other")])
    snapshot = c.model_dump()
    classify([c])
    assert c.model_dump() == snapshot
    assert len(c.methods) == 2


def test_interfaces_and_annotation_refs_filter_on_compatibility_only():
    removed = ImplementedInterface(
        fully_qualified_name="java.io.Serializable",
        change_status=ChangeStatus.REMOVED,
        binary_compatible=False,
    )
    added = ImplementedInterface(
        fully_qualified_name="java.io.Closeable",
        change_status=ChangeStatus.NEW,
        binary_compatible=True,
    )
    annotation = AnnotationRef(
        fully_qualified_name="java.lang.annotation.Retention",
        change_status=ChangeStatus.MODIFIED,
        binary_compatible=False,
    )
    c = klass(interfaces=[removed, added], annotation_refs=[annotation])
    finding, flags = classify_class(c)
    assert finding is not None
    assert finding.interfaces == (removed,)
    assert finding.annotation_refs == (annotation,)
    assert not finding.class_level


def test_class_level_accept_resolves_whole_class():
    c = klass(compatible=False, annotations=[accept_marker()], methods=[method()])
    finding, flags = classify_class(c)
    assert finding is None
    assert flags.accepted
    verdict = classify([c])
    assert verdict.blocking_classes == ()
    assert verdict.any_accepted
    assert not verdict.any_ignored


def test_class_level_ignore_resolves_members_of_compatible_class():
    c = klass(annotations=[ignore_marker()], methods=[method()], fields=[field()])
    verdict = classify([c])
    assert verdict.blocking_classes == ()
    assert verdict.any_ignored
    assert not verdict.any_accepted


def test_class_level_accept_covers_interfaces_and_annotation_refs():
    removed = ImplementedInterface(
        fully_qualified_name="java.io.Serializable",
        change_status=ChangeStatus.REMOVED,
        binary_compatible=False,
    )
    c = klass(annotations=[accept_marker()], interfaces=[removed])
    verdict = classify([c])
    assert verdict.blocking_classes == ()
    assert verdict.any_accepted


def test_class_level_accept_with_resolved_members_does_not_block():
    c = klass(compatible=False, annotations=[accept_marker()], methods=[method(annotations=[ignore_marker()])])
    verdict = classify([c])
    assert verdict.blocking_classes == ()
    assert verdict.any_accepted
    assert verdict.any_ignored


def test_restricted_class_never_blocks_but_members_still_flag():
    c = klass(
        compatible=False,
        annotations=[restricted_marker()],
        methods=[method(), method("m", annotations=[ignore_marker()])],
    )
    verdict = classify([c])
    assert verdict.blocking_classes == ()
    assert verdict.any_ignored


def test_restricted_class_with_only_member_changes_does_not_block():
    c = klass(annotations=[restricted_marker()], methods=[method()])
    finding, flags = classify_class(c)
    assert finding is None
    assert flags == MarkerFlags()
    verdict = classify([c])
    assert verdict.blocking_classes == ()
    assert not verdict.any_accepted
    assert not verdict.any_ignored


def test_restricted_class_with_member_changes_still_flags_members():
    c = klass(
        annotations=[restricted_marker()],
        constructors=[constructor(annotations=[accept_marker()])],
        fields=[field()],
    )
    verdict = classify([c])
    assert verdict.blocking_classes == ()
    assert verdict.any_accepted


def test_empty_and_missing_input():
    assert classify([]) == BuildVerdict()
    assert classify(None) == BuildVerdict()


def test_filter_elements_drops_unchanged_without_resolution():
    unchanged = method(status=ChangeStatus.UNCHANGED, annotations=[accept_marker()])
    kept, flags = filter_elements([unchanged, None, method()])
    assert [m.name for m in kept] == ["run"]
    assert not flags.accepted
