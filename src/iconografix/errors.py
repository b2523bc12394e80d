"""Error types for Iconografix.

Data-source errors (FetchError, ManifestLoadError) are recovered inside the
catalog layer and only ever logged. Configuration errors surface to callers.
"""

from __future__ import annotations


class IconografixError(Exception):
    """Base error for all Iconografix operations."""
    pass


class FetchError(IconografixError):
    """A manifest or content resource could not be read."""

    def __init__(self, location: str, reason: str = ""):
        self.location = location
        self.reason = reason
        msg = f"Failed to fetch {location}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class ManifestLoadError(IconografixError):
    """A provider manifest could not be fetched or parsed."""
    pass


class NoActiveProviderError(IconografixError):
    """A query was issued while no provider is active."""

    def __init__(self) -> None:
        super().__init__("No active provider selected")


class UnknownProviderError(IconografixError):
    """A provider id does not match any registered provider."""

    def __init__(self, provider_id: str):
        self.provider_id = provider_id
        super().__init__(f"Provider not found: {provider_id}")


class DuplicateProviderError(IconografixError):
    """A provider id was registered twice."""

    def __init__(self, provider_id: str):
        self.provider_id = provider_id
        super().__init__(f"Provider '{provider_id}' is already registered")


class HostMessagingError(IconografixError):
    """Encoding or dispatch of a host message failed."""
    pass
