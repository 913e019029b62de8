"""Error types raised by ncu."""


class NcuError(Exception):
    """Base class for errors reported to the user."""


class ConfigConflictError(NcuError):
    """Mutually exclusive options were combined."""


class ManifestError(NcuError):
    """The manifest could not be loaded."""


class ManifestNotFoundError(ManifestError):
    """No manifest exists at the expected path."""


class ManifestParseError(ManifestError):
    """The manifest is not valid JSON or has malformed dependency sections."""


class RegistryFetchError(NcuError):
    """A registry lookup failed."""

    def __init__(self, package_name: str, message: str):
        super().__init__(message)
        self.package_name = package_name


class InvalidVersionError(NcuError):
    """A version string could not be compared."""
