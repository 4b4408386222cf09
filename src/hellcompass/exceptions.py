"""Custom exception hierarchy for hellcompass."""

from __future__ import annotations

import enum


class CompassError(Exception):
    """Base exception for all hellcompass errors."""


class CompassConfigError(CompassError):
    """Invalid or missing configuration."""


class CatalogError(CompassError):
    """Target catalog is empty or holds an unusable entry."""


class UnknownTargetError(CatalogError):
    """A target name was requested that the catalog does not contain."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"unknown target {name!r}")


class GeolocationErrorCode(enum.IntEnum):
    """Error codes delivered by the positioning API."""

    PERMISSION_DENIED = 1
    POSITION_UNAVAILABLE = 2
    TIMEOUT = 3


class GeolocationError(CompassError):
    """The geolocation channel reported a failure."""

    def __init__(self, message: str, *, code: GeolocationErrorCode | int | None = None) -> None:
        self.code = code
        super().__init__(message)

    @classmethod
    def from_code(cls, code: int, message: str = "") -> GeolocationError:
        """Build the most specific subclass for a positioning API error code."""
        subclass: type[GeolocationError] = _ERRORS_BY_CODE.get(code, GeolocationError)
        try:
            resolved: GeolocationErrorCode | int = GeolocationErrorCode(code)
        except ValueError:
            resolved = code
        return subclass(message or f"geolocation error {code}", code=resolved)


class GeolocationPermissionError(GeolocationError):
    """The user denied access to their location."""


class GeolocationUnavailableError(GeolocationError):
    """The position could not be determined right now."""


class GeolocationTimeoutError(GeolocationError):
    """The position request timed out."""


_ERRORS_BY_CODE: dict[int, type[GeolocationError]] = {
    GeolocationErrorCode.PERMISSION_DENIED: GeolocationPermissionError,
    GeolocationErrorCode.POSITION_UNAVAILABLE: GeolocationUnavailableError,
    GeolocationErrorCode.TIMEOUT: GeolocationTimeoutError,
}
