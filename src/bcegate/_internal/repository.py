"""Local artifact repository lookup (Maven directory layout)."""

import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional

from bcegate.errors import ArtifactResolutionError
from .project import JAR, ArtifactCoordinates

logger = logging.getLogger(__name__)


class LocalRepository:
    """Artifacts stored as ``<root>/<group path>/<artifact>/<version>/<artifact>-<version>.jar``."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def artifact_path(self, coordinates: ArtifactCoordinates) -> Path:
        group_path = Path(*coordinates.group_id.split("."))
        filename = f"{coordinates.artifact_id}-{coordinates.version}.{JAR}"
        return self.root / group_path / coordinates.artifact_id / coordinates.version / filename

    def resolve(self, coordinates: ArtifactCoordinates) -> Path:
        """Path of the artifact's jar. Raises if it is not in the repository."""
        path = self.artifact_path(coordinates)
        if not path.is_file():
            raise ArtifactResolutionError(
                f"Could not resolve artifact [{coordinates}]: {path} not found",
                coordinates=str(coordinates),
            )
        logger.debug("Resolved %s to %s", coordinates, path)
        return path

    def resolve_all(self, artifacts: Iterable[ArtifactCoordinates]) -> List[Path]:
        return [self.resolve(a) for a in artifacts]


def unreadable_files(files: Iterable[Optional[Path]]) -> List[Optional[Path]]:
    """Files that are missing or not readable."""
    return [
        f for f in files
        if f is None or not Path(f).is_file() or not os.access(f, os.R_OK)
    ]


def check_files(files: Iterable[Optional[Path]], collection_name: str) -> bool:
    """Log and report whether every file of a collection is readable."""
    bad = unreadable_files(files)
    if bad:
        logger.error("Unreadable %s version files: %s", collection_name, [str(f) for f in bad])
        return False
    return True
