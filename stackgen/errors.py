"""Exception hierarchy for stackgen.

Every failure raised by the catalog, the profile resolver, the project model
and the artifact generator derives from :class:`StackgenError` so the CLI can
report it uniformly.  None of these are retried; the caller decides whether to
re-invoke the operation.
"""

from __future__ import annotations


class StackgenError(Exception):
    """Base class for all stackgen errors."""


class UnknownKindError(StackgenError, ValueError):
    """Raised when a string does not name a supported datastore or runtime kind."""

    def __init__(self, category: str, value: str, valid: list[str]) -> None:
        self.category = category
        self.value = value
        self.valid = valid
        super().__init__(
            f"Unknown {category}: {value!r}. Valid values: {', '.join(valid)}"
        )


class UnknownFrameworkError(StackgenError, ValueError):
    """Raised when a framework is not offered by the selected runtime kind."""

    def __init__(self, runtime: str, framework: str, valid: list[str]) -> None:
        self.runtime = runtime
        self.framework = framework
        self.valid = valid
        super().__init__(
            f"Framework {framework!r} is not available for {runtime}. "
            f"Choose one of: {', '.join(valid)}"
        )


class ProfileNotFoundError(StackgenError):
    """Raised when a profile name does not match any preset."""

    def __init__(self, name: str, available: list[str]) -> None:
        self.name = name
        self.available = available
        super().__init__(
            f"Unknown profile: {name}. Available profiles: {', '.join(available)}"
        )


class DuplicateComponentError(StackgenError):
    """Raised when an add operation would duplicate an existing datastore or runtime."""


class ConfigDecodeError(StackgenError):
    """Raised when a saved project document cannot be decoded."""

    def __init__(self, message: str, source: str = "") -> None:
        self.source = source
        prefix = f"{source}: " if source else ""
        super().__init__(f"{prefix}{message}")


class RandomSourceError(StackgenError):
    """Raised when the operating system's random source cannot be read."""


class BundleWriteError(StackgenError):
    """Raised when generated artifacts cannot be written to disk."""

    def __init__(self, message: str, path: str = "") -> None:
        self.path = path
        super().__init__(message)


class SettingsError(StackgenError):
    """Raised when settings taken from the environment are invalid."""


class InvalidComponentError(StackgenError):
    """Raised when an added datastore or runtime fails validation, e.g. a port above 65535."""
