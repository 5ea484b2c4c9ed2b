"""Project enums."""

from __future__ import annotations

from enum import StrEnum


class _EnumMixin(StrEnum):
    """Shared conversion helpers for user-facing enums."""

    @classmethod
    def from_str(cls, value: str) -> _EnumMixin:
        """Parse enum from string.

        Args:
            value: Raw string value.

        Raises:
            ValueError: If the value is not supported.

        Returns:
            _EnumMixin: Parsed enum value.
        """
        try:
            return cls(value)
        except ValueError as exc:
            supported = ", ".join(member.value for member in cls)
            message = f"Unsupported {cls.__name__} value '{value}'. Expected one of: {supported}"
            raise ValueError(message) from exc

    def to_str(self) -> str:
        """Return string representation.

        Returns:
            str: Enum string value.
        """
        return self.value


class FieldKind(_EnumMixin):
    """Supported form field kinds."""

    TEXT = "text"
    PASSWORD = "password"  # noqa: S105
    EMAIL = "email"
    NUMBER = "number"
    TEXTAREA = "textarea"
    SELECT = "select"
    SUBMIT = "submit"

    @property
    def is_input(self) -> bool:
        """Return whether the kind renders as a single-line `<input>`."""
        return self in _INPUT_KINDS


_INPUT_KINDS = frozenset({FieldKind.TEXT, FieldKind.PASSWORD, FieldKind.EMAIL, FieldKind.NUMBER})
