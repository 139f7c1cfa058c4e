"""Error hierarchy for log-serializer.

Hierarchy::

    LogSerializerError
    ├── SerializationError
    │   ├── CircularReferenceError
    │   └── UnsupportedValueError
    └── ConfigError
        ├── MissingRequiredSettingError
        └── InvalidSettingValueError

The masking engine itself never raises for masking reasons; these errors
come from the structured encoder and the settings loader.
"""

from __future__ import annotations

from typing import Any


class LogSerializerError(Exception):
    """Root of the error hierarchy.

    Args:
        message: Human-readable description.
        code: Machine-readable slug (defaults to ``default_code``).
        detail: Arbitrary extra context (serialisable dict).
        cause: Original exception that triggered this error.
    """

    default_code: str = "log_serializer_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = detail or {}
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a plain dict (safe for logging)."""
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "detail": self.detail,
        }
        if self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload


class SerializationError(LogSerializerError):
    """The structured encoder could not encode a value."""

    default_code = "serialization_error"

    def __init__(
        self,
        message: str,
        *,
        payload_type: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.payload_type = payload_type


class CircularReferenceError(SerializationError):
    """An object graph refers back to an object still being encoded."""

    default_code = "circular_reference"

    def __init__(self, payload_type: str) -> None:
        super().__init__(
            f"Circular reference detected while encoding {payload_type!r}",
            payload_type=payload_type,
        )


class UnsupportedValueError(SerializationError):
    """A leaf value has no JSON representation."""

    default_code = "unsupported_value"


class ConfigError(LogSerializerError):
    """Raised when configuration is invalid or loading failed."""

    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """A required environment variable / setting is absent."""

    default_code = "missing_required_setting"

    def __init__(self, setting_name: str) -> None:
        super().__init__(f"Required setting '{setting_name}' is missing")
        self.setting_name = setting_name


class InvalidSettingValueError(ConfigError):
    """A setting's value is present but cannot be used."""

    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(
            f"Setting '{setting_name}' has invalid value {value!r}: {reason}"
        )
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


__all__ = [
    "CircularReferenceError",
    "ConfigError",
    "InvalidSettingValueError",
    "LogSerializerError",
    "MissingRequiredSettingError",
    "SerializationError",
    "UnsupportedValueError",
]
