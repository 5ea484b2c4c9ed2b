"""Standalone HTML document assembly for rendered forms."""

from __future__ import annotations

import json
from html import escape

from formpages import logger
from formpages.exceptions import RenderError
from formpages.renderer import FormRenderer
from formpages.settings import Settings, get_settings
from formpages.typing.models import FormSpec

FORM_SPEC_ELEMENT_ID = "form-spec"
CONTAINER_ELEMENT_ID = "formContainer"

# Static client runtime. Reads the configuration from the embedded JSON block
# and swaps pre-rendered page templates; entered values are carried across
# pages and re-attached as hidden inputs when the last page is submitted.
CLIENT_RUNTIME = """
(function () {
  const spec = JSON.parse(document.getElementById('form-spec').textContent);
  const container = document.getElementById('formContainer');
  const carried = {};

  function currentForm() {
    return container.querySelector('form');
  }

  function stash() {
    const form = currentForm();
    if (!form) return;
    for (const element of form.elements) {
      if (element.name) carried[element.name] = element.value;
    }
  }

  function onSubmit(event) {
    const form = event.target;
    stash();
    for (const [name, value] of Object.entries(carried)) {
      if (form.elements.namedItem(name)) continue;
      const hidden = document.createElement('input');
      hidden.type = 'hidden';
      hidden.name = name;
      hidden.value = value;
      form.appendChild(hidden);
    }
  }

  function restore() {
    const form = currentForm();
    if (!form) return;
    for (const element of form.elements) {
      if (element.name && element.name in carried) element.value = carried[element.name];
    }
    form.addEventListener('submit', onSubmit);
  }

  window.navigateTo = function (page) {
    const template = document.querySelector('template[data-page="' + page + '"]');
    if (!template) return;
    stash();
    container.replaceChildren(template.content.cloneNode(true));
    restore();
  };

  window.validatePage = function (page) {
    const tag = 'page' + page;
    for (const field of spec.fields) {
      if (field.section !== tag || !field.required || !field.name) continue;
      const element = container.querySelector('[name="' + field.name + '"]');
      if (element && !element.value) {
        alert(container.dataset.requiredMessage.replace('{label}', field.label || field.name));
        return false;
      }
    }
    return true;
  };

  window.validateAndNavigate = function (page) {
    const form = currentForm();
    const current = form ? Number(form.dataset.page) : page - 1;
    if (window.validatePage(current)) window.navigateTo(page);
  };

  restore();
})();
"""


def serialize_form_spec(form_spec: FormSpec) -> str:
    """Serialize a form configuration for embedding inside a script element.

    Args:
        form_spec (FormSpec): Form configuration.

    Returns:
        str: JSON text with `<`, `>` and `&` written as unicode escapes.
    """
    payload = json.dumps(form_spec.model_dump(mode="json", by_alias=True, exclude_none=True), ensure_ascii=False)
    return payload.replace("&", "\\u0026").replace("<", "\\u003c").replace(">", "\\u003e")


def _unreachable_sections(form_spec: FormSpec, total_pages: int) -> list[str]:
    """Return section tags that no page template will display."""
    return sorted(
        {
            field.page
            for field in form_spec.fields
            if field.page_number is None or not 1 <= field.page_number <= total_pages
        },
    )


def build_document(form_spec: FormSpec, *, page: int = 1, settings: Settings | None = None) -> str:
    """Build a standalone HTML page hosting the paginated form.

    Args:
        form_spec (FormSpec): Form configuration.
        page (int): Page displayed when the document is opened.
        settings (Settings | None): Runtime settings, defaults to cached settings.

    Raises:
        RenderError: If the initial page lies outside the form's pages, or a field
            uses a section tag that is not `page<N>` for some N in 1..total pages.

    Returns:
        str: HTML document.
    """
    config = settings or get_settings()
    renderer = FormRenderer(form_spec, settings=config)
    if renderer.total_pages and not 1 <= page <= renderer.total_pages:
        raise RenderError(message=f"Page {page} is outside 1..{renderer.total_pages}")
    unreachable = _unreachable_sections(form_spec, renderer.total_pages)
    if unreachable:
        raise RenderError(message=f"Section tags not addressed by any page number: {', '.join(unreachable)}")

    templates = "\n".join(
        f'<template data-page="{number}">\n{renderer.render_page(number)}</template>'
        for number in range(1, renderer.total_pages + 1)
    )
    initial = renderer.render_page(page)
    logger.debug("Document assembled", form_id=form_spec.form_id, pages=renderer.total_pages, page=page)

    return f"""<!DOCTYPE html>
<html lang="{escape(config.html_lang)}">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{escape(config.page_title)}</title>
  <script type="application/json" id="{FORM_SPEC_ELEMENT_ID}">{serialize_form_spec(form_spec)}</script>
</head>
<body>
  <div id="{CONTAINER_ELEMENT_ID}" data-required-message="{escape(config.required_message, quote=True)}">
{initial}  </div>
{templates}
  <script>{CLIENT_RUNTIME}</script>
</body>
</html>
"""
