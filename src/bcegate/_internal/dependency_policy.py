"""Dependency inclusion policy.

Decides which declared dependencies are put on each side of the
comparison next to the project's own artifact.

Policy spec strings:
- ``none`` (default, also empty): no dependencies, non-transitive
- ``all``: every dependency
- ``include:<c>,<c>,...``: only the listed dependencies
- ``exclude:<c>,<c>,...``: all but the listed dependencies

Each ``<c>`` is ``group`` (every artifact of the group) or
``group:artifact`` (every version of the artifact).
"""

from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Tuple

from bcegate.errors import ConfigurationError
from .project import Dependency


POLICY_NONE = "none"
POLICY_ALL = "all"
POLICY_INCLUDE = "include:"
POLICY_EXCLUDE = "exclude:"

Predicate = Callable[[Dependency], bool]


def is_group(group_id: str) -> Predicate:
    return lambda d: d is not None and d.group_id == group_id


def is_artifact(group_id: str, artifact_id: str) -> Predicate:
    return lambda d: d is not None and d.group_id == group_id and d.artifact_id == artifact_id


# Marker annotation jars never take part in the comparison
GLOBAL_EXCLUSIONS: Tuple[Predicate, ...] = (
    is_artifact("org.jenkins-ci.tools", "jenkins-bce-annotations"),
    is_artifact("com.google.code.findbugs", "jsr305"),
    is_artifact("com.google.code.findbugs", "annotations"),
)


@dataclass(frozen=True)
class DependencyPolicy:
    """A parsed dependency policy."""
    name: str
    transitive: bool
    predicates: Tuple[Predicate, ...] = field(default=(), compare=False)
    negate: bool = False

    def matches(self, dependency: Dependency) -> bool:
        if self.name == POLICY_NONE:
            return False
        if self.name == POLICY_ALL:
            return True
        hit = any(p(dependency) for p in self.predicates)
        return not hit if self.negate else hit

    def include(self, dependency: Optional[Dependency]) -> bool:
        """True if the dependency is part of the comparison."""
        return (
            dependency is not None
            and not dependency.optional
            and not any(p(dependency) for p in GLOBAL_EXCLUSIONS)
            and self.matches(dependency)
        )

    def select(self, dependencies: Iterable[Dependency]) -> List[Dependency]:
        """Included dependencies, in declaration order."""
        return [d for d in dependencies if self.include(d)]


NONE = DependencyPolicy(name=POLICY_NONE, transitive=False)
ALL = DependencyPolicy(name=POLICY_ALL, transitive=True)


def _parse_entries(prefix: str, spec: str) -> Optional[Tuple[Predicate, ...]]:
    if not spec.startswith(prefix):
        return None
    arg = spec[len(prefix):].strip()
    if not arg:
        raise ConfigurationError(f"Invalid dependency spec: {spec}")
    predicates: List[Predicate] = []
    for entry in (e.strip() for e in arg.split(",")):
        if not entry:
            continue
        coordinates = [c.strip() for c in entry.split(":") if c.strip()]
        if len(coordinates) == 1:
            predicates.append(is_group(coordinates[0]))
        elif len(coordinates) == 2:
            predicates.append(is_artifact(coordinates[0], coordinates[1]))
        else:
            raise ConfigurationError(
                f"Invalid entry [{entry}] when parsing dependency spec {spec}"
            )
    if not predicates:
        raise ConfigurationError(f"Invalid dependency spec: {spec}")
    return tuple(predicates)


def parse_dependency_policy(spec: Optional[str]) -> DependencyPolicy:
    """Parse a dependency policy spec string."""
    if spec is None:
        return NONE
    spec = spec.strip()
    if not spec or spec.startswith(POLICY_NONE):
        return NONE
    if spec.startswith(POLICY_ALL):
        return ALL
    predicates = _parse_entries(POLICY_INCLUDE, spec)
    if predicates is not None:
        return DependencyPolicy(name="include", transitive=True, predicates=predicates)
    predicates = _parse_entries(POLICY_EXCLUDE, spec)
    if predicates is not None:
        return DependencyPolicy(name="exclude", transitive=True, predicates=predicates, negate=True)
    raise ConfigurationError(f"Invalid dependency spec: {spec}")
