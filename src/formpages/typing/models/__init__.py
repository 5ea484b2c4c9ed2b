"""Core domain model exports."""

from formpages.typing.models.form import FieldOption, FieldSpec, FormSpec, StyleSheet, page_tag

__all__ = [
    "FieldOption",
    "FieldSpec",
    "FormSpec",
    "StyleSheet",
    "page_tag",
]
