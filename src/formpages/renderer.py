"""Configuration-to-markup rendering of paginated forms."""

from __future__ import annotations

from html import escape
from typing import TYPE_CHECKING

from formpages import logger
from formpages.logging import render_context
from formpages.settings import Settings, get_settings
from formpages.typing.enums import FieldKind
from formpages.typing.models import FieldSpec, FormSpec, StyleSheet, page_tag

if TYPE_CHECKING:
    from collections.abc import Mapping

    from formpages.typing.protocol import Notifier, ValueLookup


def _attr(name: str, value: object) -> str:
    """Render one quoted attribute with an escaped value."""
    return f'{name}="{escape(str(value), quote=True)}"'


def _optional_attrs(*pairs: tuple[str, object | None]) -> list[str]:
    """Render the attributes whose value is set."""
    return [_attr(name, value) for name, value in pairs if value is not None]


def _open_tag(tag: str, attrs: list[str]) -> str:
    return f"<{tag} {' '.join(attrs)}>" if attrs else f"<{tag}>"


class FormRenderer:
    """Render one page of a multi-page form at a time.

    The renderer keeps the number of the most recently rendered page so that
    the submit control can be enabled on the last page only.
    """

    def __init__(self, form_spec: FormSpec, *, settings: Settings | None = None) -> None:
        """Initialize the renderer.

        Args:
            form_spec (FormSpec): Form configuration.
            settings (Settings | None): Runtime settings, defaults to cached settings.
        """
        self.form_spec = form_spec
        self.settings = settings or get_settings()
        self.current_page = 1
        self.total_pages = form_spec.total_pages

    def render_page(self, page_number: int) -> str:
        """Render the form markup for one page.

        Page numbers are not bounds-checked: a page without fields renders an
        empty field section followed by the navigation controls.

        Args:
            page_number (int): 1-based page number.

        Returns:
            str: Form markup.
        """
        self.current_page = page_number
        spec = self.form_spec
        styles = spec.styles or StyleSheet()
        tag = page_tag(page_number)

        parts = [
            _open_tag(
                "form",
                [
                    _attr("id", spec.form_id),
                    _attr("method", spec.method),
                    _attr("action", spec.action),
                    _attr("style", styles.form or ""),
                    _attr("data-page", page_number),
                ],
            )
            + "\n",
        ]
        with render_context(form_id=spec.form_id, page=page_number):
            parts.extend(self.render_field(field, styles) for field in spec.fields if field.page == tag)
        parts.append(self.render_navigation())
        parts.append("</form>\n")
        return "".join(parts)

    def render_field(self, field: FieldSpec, styles: StyleSheet | None = None) -> str:
        """Render the markup for a single field.

        Args:
            field (FieldSpec): Field to render.
            styles (StyleSheet | None): Inline styles of the form.

        Returns:
            str: Field markup, or an empty string for unsupported kinds.
        """
        styles = styles or StyleSheet()
        kind = field.field_kind
        if kind is None:
            logger.warning("Unknown field kind", kind=field.kind, field_name=field.name, section=field.page)
            return ""

        if kind.is_input:
            control = self._render_input(field, kind, styles)
        elif kind == FieldKind.TEXTAREA:
            control = self._render_textarea(field, styles)
        elif kind == FieldKind.SELECT:
            control = self._render_select(field, styles)
        else:
            return self._wrap(self._render_submit(field, styles), styles)

        label = field.label or ""
        caption = f"<label {_attr('style', styles.label or '')}>{escape(label)}</label>\n"
        return self._wrap(caption + control, styles)

    def render_navigation(self) -> str:
        """Render the previous/next controls for the current page.

        Returns:
            str: Navigation markup.
        """
        buttons = []
        if self.current_page > 1:
            buttons.append(
                f'<button type="button" onclick="navigateTo({self.current_page - 1})">'
                f"{escape(self.settings.previous_label)}</button>",
            )
        if self.current_page < self.total_pages:
            buttons.append(
                f'<button type="button" onclick="validateAndNavigate({self.current_page + 1})">'
                f"{escape(self.settings.next_label)}</button>",
            )
        return f'<div style="text-align: center; margin-top: 20px;">{"".join(buttons)}</div>\n'

    @staticmethod
    def validate_page(
        page_number: int,
        form_spec: FormSpec,
        lookup: ValueLookup,
        notify: Notifier | None = None,
        *,
        settings: Settings | None = None,
    ) -> bool:
        """Check that every required field of a page has a value.

        Only presence is checked; pattern, length and range constraints are
        left to the browser's native form validation.

        Args:
            page_number (int): 1-based page number.
            form_spec (FormSpec): Form configuration.
            lookup (ValueLookup): Returns the live value of an input by name.
            notify (Notifier | None): Receives the message for the first empty field.
            settings (Settings | None): Runtime settings, defaults to cached settings.

        Returns:
            bool: True when no required field of the page is empty.
        """
        config = settings or get_settings()
        with render_context(form_id=form_spec.form_id, page=page_number):
            for field in form_spec.fields_on_page(page_number):
                if not field.required or field.name is None:
                    continue
                value = lookup(field.name)
                if value is None:
                    continue
                if not value:
                    message = config.format_required_message(field.label or field.name)
                    if notify is None:
                        logger.warning(message, field_name=field.name)
                    else:
                        notify(message)
                    return False
        return True

    def _wrap(self, inner: str, styles: StyleSheet) -> str:
        return f"<div {_attr('style', styles.field or '')}>\n{inner}</div>\n"

    def _control_attrs(self, field: FieldSpec, styles: StyleSheet) -> list[str]:
        attrs = [_attr("style", styles.input or "")]
        if field.style_hint:
            attrs.append(_attr("class", field.style_hint))
        return attrs

    def _render_input(self, field: FieldSpec, kind: FieldKind, styles: StyleSheet) -> str:
        attrs = [
            _attr("type", kind.to_str()),
            _attr("name", field.name or ""),
            _attr("placeholder", field.label or ""),
            *self._control_attrs(field, styles),
        ]
        if field.required:
            attrs.append("required")
        attrs.extend(
            _optional_attrs(
                ("pattern", field.pattern),
                ("minlength", field.min_length),
                ("maxlength", field.max_length),
                ("min", field.min_value),
                ("max", field.max_value),
            ),
        )
        return _open_tag("input", attrs) + "\n"

    def _render_textarea(self, field: FieldSpec, styles: StyleSheet) -> str:
        attrs = [
            _attr("name", field.name or ""),
            _attr("placeholder", field.label or ""),
            *self._control_attrs(field, styles),
        ]
        if field.required:
            attrs.append("required")
        attrs.extend(_optional_attrs(("minlength", field.min_length), ("maxlength", field.max_length)))
        return _open_tag("textarea", attrs) + "</textarea>\n"

    def _render_select(self, field: FieldSpec, styles: StyleSheet) -> str:
        attrs = [_attr("name", field.name or ""), *self._control_attrs(field, styles)]
        if field.required:
            attrs.append("required")
        lines = [_open_tag("select", attrs)]
        lines.extend(
            f"<option {_attr('value', option.value)}>{escape(option.label)}</option>" for option in field.options
        )
        lines.append("</select>")
        return "\n".join(lines) + "\n"

    def _render_submit(self, field: FieldSpec, styles: StyleSheet) -> str:
        attrs = [
            _attr("type", "submit"),
            _attr("value", field.value or ""),
            *self._control_attrs(field, styles),
        ]
        if self.current_page != self.total_pages:
            attrs.append("disabled")
        return _open_tag("input", attrs) + "\n"


def mapping_lookup(values: Mapping[str, object], *, missing_as_empty: bool = True) -> ValueLookup:
    """Adapt a name -> value mapping to the lookup used by `validate_page`.

    A submitted mapping has no undrawn inputs: by default a missing name or a
    null value counts as an empty field. With `missing_as_empty=False` they
    behave like inputs absent from the target and are skipped.

    Args:
        values (Mapping[str, object]): Submitted values keyed by field name.
        missing_as_empty (bool): Report missing or null values as empty strings.

    Returns:
        ValueLookup: Lookup callable.
    """
    absent = "" if missing_as_empty else None

    def _lookup(name: str) -> str | None:
        value = values.get(name)
        return absent if value is None else str(value)

    return _lookup
