"""Configuration-level failures.

These abort a run before classification is attempted. They are distinct
from a blocking classification result, which is an expected outcome and
never raised.
"""


class ConfigurationError(ValueError):
    """Invalid baseline/dependency specification or unusable input files."""


class CatalogError(ConfigurationError):
    """The remote plugin catalog could not be fetched or understood."""

    def __init__(self, message: str, url: str):
        super().__init__(message)
        self.url = url


class ArtifactResolutionError(ConfigurationError):
    """An artifact could not be located in the repository."""

    def __init__(self, message: str, coordinates: str):
        super().__init__(message)
        self.coordinates = coordinates
