"""bcegate: binary compatibility enforcement gate for build pipelines."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("bcegate")
except PackageNotFoundError:
    __version__ = "dev"

# Public API exports
from bcegate.api import check, classify_diff, load_diff_tree, resolve_baseline_files, ComparisonInputs
from bcegate.contracts import BlockingClassEntry, GateResult, MemberEntry
from bcegate.codes import ChangeStatus, GateStatus
from bcegate.errors import ArtifactResolutionError, CatalogError, ConfigurationError

__all__ = [
    "__version__",
    "check",
    "classify_diff",
    "load_diff_tree",
    "resolve_baseline_files",
    "ComparisonInputs",
    "BlockingClassEntry",
    "GateResult",
    "MemberEntry",
    "ChangeStatus",
    "GateStatus",
    "ArtifactResolutionError",
    "CatalogError",
    "ConfigurationError",
]
