"""Typing-centric domain modules."""

from formpages.typing.enums import FieldKind
from formpages.typing.models import FieldOption, FieldSpec, FormSpec, StyleSheet, page_tag
from formpages.typing.protocol import Notifier, ValueLookup

__all__ = [
    "FieldKind",
    "FieldOption",
    "FieldSpec",
    "FormSpec",
    "Notifier",
    "StyleSheet",
    "ValueLookup",
    "page_tag",
]
