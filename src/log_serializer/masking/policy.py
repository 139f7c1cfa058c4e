"""Masking – MaskingPolicy and SensitiveField rules."""
from __future__ import annotations

import dataclasses
from collections.abc import Iterable

from log_serializer.encoding import EncoderOptions

DEFAULT_MASK_TEXT = "*****"


@dataclasses.dataclass(frozen=True, slots=True)
class SensitiveField:
    """Marks *field_name* as sensitive.

    Parameters
    ----------
    field_name:
        Attribute name, compared case-sensitively.
    type_name:
        Short (``"Customer"``) or fully-qualified (``"shop.models.Customer"``)
        name of the class declaring the field.  ``None`` matches the field
        on every class.
    """

    field_name: str
    type_name: str | None = None

    def matches(self, field_name: str, type_name: str, full_type_name: str) -> bool:
        if self.field_name != field_name:
            return False
        return self.type_name is None or self.type_name in (type_name, full_type_name)


class MaskingPolicy:
    """Which fields are sensitive and what replaces them.

    A field is sensitive when it carries the
    :class:`~log_serializer.markers.Sensitive` marker or matches any entry
    of :attr:`sensitive_fields`.

    Parameters
    ----------
    mask_text:
        Replacement for sensitive string values.
    sensitive_fields:
        Explicit rules, OR'd with field markers.
    encoder_options:
        Formatting used when the policy serializes to text.
    """

    def __init__(
        self,
        *,
        mask_text: str = DEFAULT_MASK_TEXT,
        sensitive_fields: Iterable[SensitiveField] = (),
        encoder_options: EncoderOptions | None = None,
    ) -> None:
        self.mask_text = mask_text
        self.sensitive_fields: list[SensitiveField] = list(sensitive_fields)
        self._encoder_options = encoder_options or EncoderOptions()

    @property
    def encoder_options(self) -> EncoderOptions:
        return self._encoder_options

    @encoder_options.setter
    def encoder_options(self, options: EncoderOptions) -> None:
        self._encoder_options = dataclasses.replace(options)

    def add_sensitive_field(self, field_name: str, type_name: str | None = None) -> MaskingPolicy:
        """Append a rule; returns ``self`` so calls can be chained."""
        self.sensitive_fields.append(SensitiveField(field_name, type_name))
        return self

    def is_sensitive(
        self,
        field_name: str,
        type_name: str,
        full_type_name: str,
        has_marker: bool = False,
    ) -> bool:
        if has_marker:
            return True
        return any(
            rule.matches(field_name, type_name, full_type_name)
            for rule in self.sensitive_fields
        )

    def copy(self) -> MaskingPolicy:
        """Independent copy; mutating it never affects ``self``."""
        return MaskingPolicy(
            mask_text=self.mask_text,
            sensitive_fields=self.sensitive_fields,
            encoder_options=dataclasses.replace(self._encoder_options),
        )

    def __repr__(self) -> str:
        return (
            f"MaskingPolicy(mask_text={self.mask_text!r}, "
            f"sensitive_fields={self.sensitive_fields!r}, "
            f"encoder_options={self._encoder_options!r})"
        )


__all__ = ["DEFAULT_MASK_TEXT", "MaskingPolicy", "SensitiveField"]
