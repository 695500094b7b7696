"""Artifact coordinates and the project descriptor."""

import json
from pathlib import Path
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from bcegate.errors import ConfigurationError


JAR = "jar"
PLUGIN_PACKAGING = "hpi"


class ArtifactCoordinates(BaseModel):
    """group:artifact:version of a jar artifact."""
    group_id: str
    artifact_id: str
    version: str

    model_config = ConfigDict(frozen=True, extra="forbid")

    def __str__(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.version}"


class Dependency(ArtifactCoordinates):
    """A declared dependency of the project."""
    optional: bool = False


class ProjectDescriptor(BaseModel):
    """Identity of the project being gated, plus its declared dependencies."""
    group_id: str
    artifact_id: str
    version: str
    packaging: str = JAR
    dependencies: List[Dependency] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    @property
    def coordinates(self) -> ArtifactCoordinates:
        return ArtifactCoordinates(
            group_id=self.group_id, artifact_id=self.artifact_id, version=self.version
        )

    def with_version(self, version: str) -> ArtifactCoordinates:
        """Coordinates of this project's artifact at another version."""
        return ArtifactCoordinates(
            group_id=self.group_id, artifact_id=self.artifact_id, version=version
        )

    @property
    def is_plugin(self) -> bool:
        return self.packaging == PLUGIN_PACKAGING


def parse_coordinates(coordinates: str) -> ArtifactCoordinates:
    """Parse ``group:artifact:version``. Exactly three parts are required."""
    parts = [p.strip() for p in coordinates.split(":")]
    if len(parts) != 3 or not all(parts):
        raise ConfigurationError(f"Invalid coordinates [{coordinates}]")
    return ArtifactCoordinates(group_id=parts[0], artifact_id=parts[1], version=parts[2])


def load_project(path: Path) -> ProjectDescriptor:
    """Load a project descriptor from JSON file."""
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    return ProjectDescriptor(**data)
