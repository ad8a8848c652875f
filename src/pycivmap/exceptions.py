"""Custom exception hierarchy for pycivmap."""

from __future__ import annotations


class CivMapError(Exception):
    """Base exception for all pycivmap errors."""


class CivMapConfigError(CivMapError):
    """Invalid or missing configuration."""


class CivMapTransportError(CivMapError):
    """HTTP-level failure while fetching a remote document (network, non-200, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str = "",
    ) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class CivMapFileReadError(CivMapError):
    """A dropped file could not be read."""

    def __init__(self, message: str, *, filename: str = "") -> None:
        self.filename = filename
        super().__init__(message)


class CivMapValidationError(CivMapError):
    """A document failed structural validation as a whole."""


class CollectionVersionError(CivMapValidationError):
    """Collection document carries an unsupported ``info.version``.

    ``version`` is ``None`` when the document has no ``info`` block or
    no version inside it.
    """

    def __init__(self, version: object | None) -> None:
        self.version = version
        shown = "<missing>" if version is None else repr(version)
        super().__init__(f"Can't read Collection version {shown}, only 2.0.0 please")


class CollectionFormatError(CivMapValidationError):
    """Collection document is not a JSON object (or not JSON at all)."""


class FeatureNotFoundError(CivMapError):
    """A referenced feature id is not present in the store.

    Non-fatal: the orchestrator records it and continues.
    """

    def __init__(self, feature_id: str) -> None:
        self.feature_id = feature_id
        super().__init__(f"Feature not found: {feature_id}")
