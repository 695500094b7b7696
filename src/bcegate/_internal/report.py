"""Render a build verdict as a gate result and a human-readable report."""

from typing import Iterable, List, Tuple

from bcegate.codes import GateStatus
from bcegate.contracts import BlockingClassEntry, GateResult, MemberEntry
from bcegate.kernel.classify import BuildVerdict, ClassFinding
from bcegate.kernel.diff_tree import describe_member


REPORT_TITLE = "Binary Incompatible Changes Detected"
IGNORED_WARNING = "You have ignored binary compatibility issues. Please think again"
ACCEPTED_WARNING = (
    "You have accepted binary compatibility issues. "
    "Remember to document them in the release notes"
)


def _members(finding: ClassFinding) -> Iterable[Tuple[str, object]]:
    for kind, items in (
        ("interface", finding.interfaces),
        ("field", finding.fields),
        ("constructor", finding.constructors),
        ("method", finding.methods),
        ("annotation", finding.annotation_refs),
    ):
        for item in items:
            yield kind, item


def advisory_warnings(verdict: BuildVerdict) -> List[str]:
    """Warnings for accepted/ignored markers. Only emitted when nothing blocks."""
    if not verdict.is_empty():
        return []
    warnings = []
    if verdict.any_ignored:
        warnings.append(IGNORED_WARNING)
    if verdict.any_accepted:
        warnings.append(ACCEPTED_WARNING)
    return warnings


def build_gate_result(verdict: BuildVerdict) -> GateResult:
    """Convert a verdict into the public result model."""
    entries = []
    for finding in verdict.findings:
        klass = finding.klass
        entries.append(BlockingClassEntry(
            fully_qualified_name=klass.fully_qualified_name,
            change_status=klass.change_status.value,
            class_level=finding.class_level,
            compatibility_changes=list(klass.compatibility_changes),
            members=[
                MemberEntry(
                    kind=kind,
                    name=describe_member(item),
                    change_status=item.change_status.value,
                    compatibility_changes=list(item.compatibility_changes),
                )
                for kind, item in _members(finding)
            ],
        ))

    warnings = advisory_warnings(verdict)
    if entries:
        status = GateStatus.BLOCKED
    elif warnings:
        status = GateStatus.PASSED_WITH_WARNINGS
    else:
        status = GateStatus.PASSED
    return GateResult(
        status=status,
        ok=not entries,
        blocking_classes=entries,
        any_accepted=verdict.any_accepted,
        any_ignored=verdict.any_ignored,
        warnings=warnings,
    )


def skipped_result(reason: str) -> GateResult:
    return GateResult(status=GateStatus.SKIPPED, ok=True, warnings=[reason], skipped_reason=reason)


def render_text_report(result: GateResult) -> str:
    """Plain-text report of blocking classes, one block per class."""
    lines = [REPORT_TITLE, ""]
    for entry in result.blocking_classes:
        changes = f" {entry.compatibility_changes}" if entry.compatibility_changes else ""
        lines.append(f"***! {entry.change_status} CLASS: {entry.fully_qualified_name}{changes}")
        for member in entry.members:
            member_changes = f" {member.compatibility_changes}" if member.compatibility_changes else ""
            lines.append(
                f"\t***! {member.change_status} {member.kind.upper()}: {member.name}{member_changes}"
            )
    return "\n".join(lines) + "\n"
