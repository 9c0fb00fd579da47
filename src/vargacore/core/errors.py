"""
Exception hierarchy for the varga engine.

Every error raised by the engine is reproducible: projections are pure
functions of their inputs and the read-only registry, so nothing here is
retried.
"""

from __future__ import annotations

__all__ = [
    "InvalidLongitudeError",
    "UnsupportedSchemeError",
    "VargaConfigError",
    "VargaError",
    "VargaInvariantError",
]


class VargaError(Exception):
    """Base exception for varga-related errors"""

    pass


class InvalidLongitudeError(VargaError, ValueError):
    """Non-finite longitude (NaN or infinity) handed to the engine"""

    def __init__(self, value: float, body: str | None = None):
        self.value = value
        self.body = body
        where = f" for {body}" if body else ""
        super().__init__(f"Longitude must be finite{where}, got {value!r}")


class UnsupportedSchemeError(VargaError, KeyError):
    """Unknown or unconfigured scheme identifier"""

    def __init__(self, scheme_id: object, available: list[str] | None = None):
        self.scheme_id = scheme_id
        self.available = available or []
        super().__init__(
            f"Unknown varga scheme: {scheme_id!r}. Available: {self.available}"
        )

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class VargaInvariantError(VargaError):
    """Internal invariant violated (programming error, not user-recoverable)"""

    pass


class VargaConfigError(VargaError):
    """Configuration errors (missing table file, invalid YAML, bad table shape)"""

    pass
