"""Baseline acquisition: which artifact the new build is compared against.

Baseline spec strings:
- ``skip...``: no comparison
- ``version:<version>``: this project's artifact at another version
- ``artifact:<group>:<artifact>:<version>``: an explicit artifact
- ``update:<url>``: look this project up in a remote plugin catalog
  (update center) and use the coordinates it publishes
"""

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import httpx

from bcegate.errors import CatalogError, ConfigurationError
from .project import ArtifactCoordinates, ProjectDescriptor, parse_coordinates

logger = logging.getLogger(__name__)


SKIP = "skip"
UPDATE_CENTER = "update:"
VERSION = "version:"
ARTIFACT = "artifact:"

DEFAULT_BASELINE = "update:https://updates.jenkins-ci.org/update-center.json"
DEFAULT_TIMEOUT = 30.0


class BaselineKind(str, Enum):
    SKIP = "skip"
    UPDATE_CENTER = "update"
    VERSION = "version"
    ARTIFACT = "artifact"


@dataclass(frozen=True)
class BaselineSpec:
    """A parsed baseline spec."""
    kind: BaselineKind
    payload: str = ""

    @property
    def skip(self) -> bool:
        return self.kind == BaselineKind.SKIP


def parse_baseline_spec(spec: Optional[str]) -> BaselineSpec:
    """Parse a baseline spec string.

    Prefixes with an empty payload do not select that kind.
    """
    if spec is None:
        return BaselineSpec(kind=BaselineKind.SKIP)
    spec = spec.strip()
    if not spec or spec.startswith(SKIP):
        return BaselineSpec(kind=BaselineKind.SKIP)
    for prefix, kind in (
        (UPDATE_CENTER, BaselineKind.UPDATE_CENTER),
        (VERSION, BaselineKind.VERSION),
        (ARTIFACT, BaselineKind.ARTIFACT),
    ):
        if spec.startswith(prefix):
            payload = spec[len(prefix):].strip()
            if payload:
                return BaselineSpec(kind=kind, payload=payload)
    raise ConfigurationError(f"Unable to resolve baseline [{spec}]")


def extract_json_payload(text: str) -> str:
    """Strip a JSONP wrapper such as ``updateCenter.post({...});``."""
    start = text.find("{")
    if start < 0:
        raise ValueError("No JSON object in catalog response")
    body = text[start:]
    end = body.rfind(")")
    if end > body.rfind("}"):
        body = body[:end]
    return body


def fetch_catalog_coordinates(
    url: str,
    artifact_id: str,
    client: Optional[httpx.Client] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> ArtifactCoordinates:
    """Fetch the catalog and read ``plugins.<artifact_id>.gav``."""
    logger.info("Fetching plugin catalog %s", url)
    try:
        if client is None:
            with httpx.Client(timeout=timeout, follow_redirects=True) as owned:
                response = owned.get(url)
        else:
            response = client.get(url, timeout=timeout)
        response.raise_for_status()
        catalog = json.loads(extract_json_payload(response.text))
    except (httpx.HTTPError, ValueError) as e:
        raise CatalogError(
            f"Unable to get plugin information from update center [{url}]: {e}", url=url
        ) from e

    try:
        gav = catalog["plugins"][artifact_id]["gav"]
        if not isinstance(gav, str):
            raise TypeError(f"gav is {type(gav).__name__}, expected string")
    except (KeyError, TypeError) as e:
        raise CatalogError(
            f"Unable to get plugin coordinates from update center [{url}] info: {e}", url=url
        ) from e
    return parse_coordinates(gav)


def resolve_baseline(
    spec: BaselineSpec,
    project: ProjectDescriptor,
    client: Optional[httpx.Client] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> Optional[ArtifactCoordinates]:
    """Coordinates of the baseline artifact, or None when the baseline is skipped."""
    if spec.skip:
        return None
    if spec.kind == BaselineKind.UPDATE_CENTER:
        coordinates = fetch_catalog_coordinates(
            spec.payload, project.artifact_id, client=client, timeout=timeout
        )
    elif spec.kind == BaselineKind.VERSION:
        coordinates = project.with_version(spec.payload)
    else:
        coordinates = parse_coordinates(spec.payload)
    logger.info("Baseline for %s is %s", project.coordinates, coordinates)
    return coordinates
