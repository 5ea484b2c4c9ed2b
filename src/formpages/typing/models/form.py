"""Form configuration models."""

from __future__ import annotations

import re
from typing import cast

from pydantic import BaseModel, ConfigDict, Field

from formpages.typing.enums import FieldKind

_PAGE_TAG_RE = re.compile(r"^page(\d+)$")


def page_tag(page_number: int) -> str:
    """Return the section tag addressing a 1-based page number.

    Args:
        page_number (int): 1-based page number.

    Returns:
        str: Section tag, e.g. ``page2``.
    """
    return f"page{page_number}"


class FieldOption(BaseModel):
    """One entry of a select dropdown."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    value: str
    label: str


class FieldSpec(BaseModel):
    """Single declarative form field."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    kind: str = Field(alias="type")
    page: str = Field(alias="section")
    name: str | None = None
    label: str | None = None
    value: str | None = None
    required: bool = False
    pattern: str | None = None
    min_length: int | None = Field(default=None, alias="minlength")
    max_length: int | None = Field(default=None, alias="maxlength")
    min_value: int | None = Field(default=None, alias="min")
    max_value: int | None = Field(default=None, alias="max")
    options: list[FieldOption] = Field(default_factory=list)
    style_hint: str | None = Field(default=None, alias="style")

    @property
    def field_kind(self) -> FieldKind | None:
        """Return the known kind, or None for unsupported kinds."""
        try:
            return cast("FieldKind", FieldKind.from_str(self.kind))
        except ValueError:
            return None

    @property
    def page_number(self) -> int | None:
        """Return the page number encoded in the section tag, if any."""
        match = _PAGE_TAG_RE.match(self.page)
        return int(match.group(1)) if match else None

    def on_page(self, page_number: int) -> bool:
        """Return whether the field belongs to the given page."""
        return self.page == page_tag(page_number)


class StyleSheet(BaseModel):
    """Opaque inline style strings applied to the rendered form."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    form: str | None = None
    field: str | None = None
    label: str | None = None
    input: str | None = None


class FormSpec(BaseModel):
    """Declarative description of a multi-page form."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    form_id: str = Field(alias="formId")
    method: str = "POST"
    action: str
    styles: StyleSheet | None = None
    fields: list[FieldSpec] = Field(default_factory=list)

    @property
    def total_pages(self) -> int:
        """Return the number of distinct page tags across all fields."""
        return len({field.page for field in self.fields})

    def fields_on_page(self, page_number: int) -> list[FieldSpec]:
        """Return the fields of one page, in configuration order.

        Args:
            page_number (int): 1-based page number.

        Returns:
            list[FieldSpec]: Fields tagged with ``page<page_number>``.
        """
        return [field for field in self.fields if field.on_page(page_number)]
