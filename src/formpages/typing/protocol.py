"""Render target interfaces."""

from __future__ import annotations

from typing import Protocol


class ValueLookup(Protocol):
    """Fetch the current value of a named input from a live render target."""

    def __call__(self, name: str) -> str | None:
        """Return the input value, or None when no such input exists.

        Args:
            name: Form-submission key of the input.

        Returns:
            str | None: Current value.
        """


class Notifier(Protocol):
    """Surface a message to the user filling in the form."""

    def __call__(self, message: str) -> None:
        """Deliver the message.

        Args:
            message: User-facing text.
        """
