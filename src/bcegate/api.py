"""Public API for bcegate.

High-level functions that return complete, structured results.
Callers should use these functions instead of importing from _internal.
"""

import json
import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional, Union

import httpx
from pydantic import BaseModel, Field

from bcegate.contracts import GateResult
from bcegate.errors import ConfigurationError
from bcegate.kernel.classify import BuildVerdict, classify
from bcegate.kernel.diff_tree import ClassDiff, DiffDocument
from bcegate._internal.baseline import (
    DEFAULT_BASELINE,
    DEFAULT_TIMEOUT,
    parse_baseline_spec,
    resolve_baseline,
)
from bcegate._internal.dependency_policy import parse_dependency_policy
from bcegate._internal.project import ArtifactCoordinates, ProjectDescriptor, load_project
from bcegate._internal.report import build_gate_result, skipped_result
from bcegate._internal.repository import LocalRepository, check_files

logger = logging.getLogger(__name__)

SKIP_REASON_BASELINE = "Skipping execution."
SKIP_REASON_NOT_PLUGIN = "Not a Jenkins plugin. Skipping"


def _normalize_path(path: Union[str, os.PathLike, Path]) -> Path:
    """Normalize path input to Path object."""
    return Path(path) if not isinstance(path, Path) else path


class ComparisonInputs(BaseModel):
    """File sets to hand to the external comparator."""
    skipped_reason: Optional[str] = None
    baseline: Optional[str] = None  # group:artifact:version of the old side
    old_files: List[str] = Field(default_factory=list)
    new_files: List[str] = Field(default_factory=list)

    @property
    def skipped(self) -> bool:
        return self.skipped_reason is not None


def load_diff_tree(path: Union[str, os.PathLike, Path]) -> DiffDocument:
    """Load a comparator diff document from JSON file."""
    with open(_normalize_path(path), 'r', encoding='utf-8') as f:
        data = json.load(f)
    return DiffDocument(**data)


def classify_diff(diff: Union[DiffDocument, Iterable[ClassDiff], None]) -> BuildVerdict:
    """Classify a diff document (or a bare sequence of class diffs)."""
    classes = diff.classes if isinstance(diff, DiffDocument) else diff
    return classify(classes)


def check(
    diff: Union[str, os.PathLike, Path, DiffDocument, Iterable[ClassDiff]],
    baseline: Optional[str] = None,
) -> GateResult:
    """
    Run the gate over a diff tree.

    Args:
        diff: Path to a diff JSON document, a loaded document, or class diffs.
        baseline: Optional baseline spec; a ``skip`` spec skips the gate
            without reading the diff.

    Returns:
        GateResult; ``ok`` is False only when blocking classes exist.
        Advisory warnings are returned in ``warnings`` and not logged.
    """
    if baseline is not None and parse_baseline_spec(baseline).skip:
        logger.warning(SKIP_REASON_BASELINE)
        return skipped_result(SKIP_REASON_BASELINE)
    if isinstance(diff, (str, os.PathLike)):
        diff = load_diff_tree(diff)
    verdict = classify_diff(diff)
    result = build_gate_result(verdict)
    if not result.ok:
        logger.error("%d class(es) with binary incompatible changes", len(result.blocking_classes))
    return result


def _artifact_files(
    repository: LocalRepository,
    coordinates: ArtifactCoordinates,
    project: ProjectDescriptor,
    dependency_spec: Optional[str],
) -> List[Path]:
    policy = parse_dependency_policy(dependency_spec)
    files = [repository.resolve(coordinates)]
    if policy.transitive:
        files.extend(repository.resolve_all(policy.select(project.dependencies)))
    return files


def resolve_baseline_files(
    project: Union[str, os.PathLike, Path, ProjectDescriptor],
    repository_root: Union[str, os.PathLike, Path],
    baseline: Optional[str] = DEFAULT_BASELINE,
    dependency_spec: Optional[str] = None,
    client: Optional[httpx.Client] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> ComparisonInputs:
    """
    Resolve the old (baseline) and new file sets for a project.

    Raises:
        ConfigurationError: unparseable specs, unreachable catalog,
            unresolvable artifacts or unreadable files.
    """
    if not isinstance(project, ProjectDescriptor):
        project = load_project(_normalize_path(project))

    spec = parse_baseline_spec(baseline)
    if spec.skip:
        logger.warning(SKIP_REASON_BASELINE)
        return ComparisonInputs(skipped_reason=SKIP_REASON_BASELINE)
    if not project.is_plugin:
        logger.warning(SKIP_REASON_NOT_PLUGIN)
        return ComparisonInputs(skipped_reason=SKIP_REASON_NOT_PLUGIN)

    repository = LocalRepository(_normalize_path(repository_root))
    new_files = _artifact_files(repository, project.coordinates, project, dependency_spec)
    baseline_coordinates = resolve_baseline(spec, project, client=client, timeout=timeout)
    old_files = _artifact_files(repository, baseline_coordinates, project, dependency_spec)

    old_ok = check_files(old_files, "old")
    new_ok = check_files(new_files, "new")
    if not old_ok or not new_ok:
        raise ConfigurationError("There are unreadable files to compare")

    logger.info(
        "Comparing %s with baseline %s for binary compatibility enforcement",
        [str(f) for f in new_files], [str(f) for f in old_files],
    )
    return ComparisonInputs(
        baseline=str(baseline_coordinates),
        old_files=[str(f) for f in old_files],
        new_files=[str(f) for f in new_files],
    )
