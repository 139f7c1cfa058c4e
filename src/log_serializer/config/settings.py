"""Config – 12-factor settings for the default masking policy.

Environment variables (prefix ``LOG_SERIALIZER_``)::

    LOG_SERIALIZER_MASK_TEXT=[hidden]
    LOG_SERIALIZER_INDENT=-1                  # negative: compact output
    LOG_SERIALIZER_NAMING=camel_case
    LOG_SERIALIZER_ENUMS_AS_TEXT=false
    LOG_SERIALIZER_SENSITIVE_FIELDS=password,Customer.email,shop.models.Card.number
"""
from __future__ import annotations

import abc
import dataclasses
import os
import typing
from collections.abc import Mapping
from typing import Any, ClassVar, TypeVar

from log_serializer.encoding import EncoderOptions, NamingPolicy
from log_serializer.errors import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)
from log_serializer.masking import DEFAULT_MASK_TEXT, MaskingPolicy, SensitiveField, configure


@dataclasses.dataclass
class Settings:
    """Base class for 12-factor settings."""

    _prefix: ClassVar[str] = ""

    def __post_init__(self) -> None:
        self._validate()

    def _validate(self) -> None:
        """Override to add cross-field validation."""


T = TypeVar("T", bound=Settings)


class SettingsLoader(abc.ABC):
    """Port: load settings from an external source."""

    @abc.abstractmethod
    def load(self, settings_class: type[T]) -> T: ...


class EnvSettingsLoader(SettingsLoader):
    """Load settings from OS environment variables."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ

    def load(self, settings_class: type[T]) -> T:
        environ = os.environ if self._environ is None else self._environ
        prefix = getattr(settings_class, "_prefix", "").upper()
        hints = typing.get_type_hints(settings_class)
        kwargs: dict[str, Any] = {}

        for field in dataclasses.fields(settings_class):  # type: ignore[arg-type]
            env_key = f"{prefix}_{field.name}".upper().lstrip("_")
            raw = environ.get(env_key)

            if raw is None:
                if (
                    field.default is dataclasses.MISSING
                    and field.default_factory is dataclasses.MISSING  # type: ignore[misc]
                ):
                    raise MissingRequiredSettingError(env_key)
                continue

            try:
                kwargs[field.name] = self._coerce(raw, hints.get(field.name, str))
            except ValueError as exc:
                raise InvalidSettingValueError(env_key, raw, str(exc)) from exc

        try:
            return settings_class(**kwargs)
        except ConfigError:
            raise
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Failed to load settings: {exc}", cause=exc) from exc

    def _coerce(self, value: str, type_hint: Any) -> Any:
        if type_hint is bool:
            return value.strip().lower() in ("1", "true", "yes", "on")
        if type_hint is int:
            return int(value)
        if type_hint is float:
            return float(value)
        if typing.get_origin(type_hint) is list:
            return [v.strip() for v in value.split(",") if v.strip()]
        return value


@dataclasses.dataclass
class LogSerializerSettings(Settings):
    """Default-policy settings read from the environment."""

    _prefix: ClassVar[str] = "LOG_SERIALIZER"

    mask_text: str = DEFAULT_MASK_TEXT
    indent: int = 2
    naming: str = NamingPolicy.PRESERVE.value
    enums_as_text: bool = True
    sensitive_fields: list[str] = dataclasses.field(default_factory=list)

    def _validate(self) -> None:
        valid = {policy.value for policy in NamingPolicy}
        if self.naming not in valid:
            raise InvalidSettingValueError(
                "naming", self.naming, f"expected one of {sorted(valid)}"
            )
        for entry in self.sensitive_fields:
            if not entry or entry.startswith(".") or entry.endswith("."):
                raise InvalidSettingValueError(
                    "sensitive_fields", entry, "expected 'field' or 'TypeName.field'"
                )

    def rules(self) -> list[SensitiveField]:
        """Parse ``field`` / ``TypeName.field`` entries; the last segment is the field."""
        rules: list[SensitiveField] = []
        for entry in self.sensitive_fields:
            type_name, _, field_name = entry.rpartition(".")
            rules.append(SensitiveField(field_name, type_name or None))
        return rules

    def encoder_options(self) -> EncoderOptions:
        return EncoderOptions(
            indent=self.indent if self.indent >= 0 else None,
            naming=NamingPolicy(self.naming),
            enums_as_text=self.enums_as_text,
        )

    def apply(self, policy: MaskingPolicy) -> None:
        """Write these settings onto *policy*."""
        policy.mask_text = self.mask_text
        policy.sensitive_fields.extend(self.rules())
        policy.encoder_options = self.encoder_options()


def configure_from_env(loader: SettingsLoader | None = None) -> LogSerializerSettings:
    """Load :class:`LogSerializerSettings` and publish them as the default policy."""
    settings = (loader or EnvSettingsLoader()).load(LogSerializerSettings)
    configure(settings.apply)
    return settings


__all__ = [
    "EnvSettingsLoader",
    "LogSerializerSettings",
    "Settings",
    "SettingsLoader",
    "configure_from_env",
]
