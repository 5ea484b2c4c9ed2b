from __future__ import annotations

import json
import re

import pytest

from formpages.document import build_document, serialize_form_spec
from formpages.exceptions import RenderError
from formpages.settings import Settings
from formpages.typing.models import FieldSpec, FormSpec

_SPEC_BLOCK = re.compile(r'<script type="application/json" id="form-spec">(.*?)</script>', re.DOTALL)


def test_document_embeds_configuration_as_json(registration_spec: FormSpec, settings: Settings) -> None:
    document = build_document(registration_spec, settings=settings)

    match = _SPEC_BLOCK.search(document)
    assert match is not None
    payload = json.loads(match.group(1))
    assert payload["formId"] == "meuFormulario"
    assert payload["fields"][0]["section"] == "page1"
    assert FormSpec.model_validate(payload) == registration_spec


def test_document_holds_one_template_per_page(registration_spec: FormSpec, settings: Settings) -> None:
    document = build_document(registration_spec, settings=settings)

    assert document.count("<template data-page=") == 3
    assert '<template data-page="3">' in document


def test_document_renders_requested_page_first(registration_spec: FormSpec, settings: Settings) -> None:
    document = build_document(registration_spec, page=2, settings=settings)

    container = document.split('<div id="formContainer"', 1)[1].split("</div>\n<template", 1)[0]
    assert 'name="email"' in container
    assert 'name="username"' not in container


def test_document_uses_settings_for_head(registration_spec: FormSpec) -> None:
    settings = Settings(_env_file=None, html_lang="en", page_title="Sign up")

    document = build_document(registration_spec, settings=settings)

    assert document.startswith("<!DOCTYPE html>\n<html lang=\"en\">")
    assert "<title>Sign up</title>" in document


def test_document_ships_static_runtime(registration_spec: FormSpec, settings: Settings) -> None:
    document = build_document(registration_spec, settings=settings)

    assert "window.navigateTo = function (page)" in document
    assert "window.validateAndNavigate = function (page)" in document
    assert "class FormRenderer" not in document


def test_document_rejects_page_outside_form(registration_spec: FormSpec, settings: Settings) -> None:
    with pytest.raises(RenderError, match="outside 1..3"):
        build_document(registration_spec, page=4, settings=settings)


def test_serialized_spec_cannot_close_script_element() -> None:
    spec = FormSpec(
        form_id="f",
        action="/",
        fields=[FieldSpec(kind="text", name="a", label="</script><script>alert(1)", page="page1")],
    )

    payload = serialize_form_spec(spec)

    assert "<" not in payload
    assert json.loads(payload)["fields"][0]["label"] == "</script><script>alert(1)"


def test_every_template_form_carries_its_page_number(registration_spec: FormSpec, settings: Settings) -> None:
    document = build_document(registration_spec, settings=settings)

    templates = re.findall(r'<template data-page="(\d+)">\n<form [^>]*data-page="(\d+)">', document)
    assert templates == [("1", "1"), ("2", "2"), ("3", "3")]


def test_initial_form_carries_its_page_number(registration_spec: FormSpec, settings: Settings) -> None:
    document = build_document(registration_spec, page=2, settings=settings)

    container = document.split('<div id="formContainer"', 1)[1]
    assert re.search(r'<form [^>]*data-page="2">', container.split("</form>", 1)[0])


def test_runtime_reads_page_and_carries_values_as_hidden_inputs(registration_spec: FormSpec, settings: Settings) -> None:
    document = build_document(registration_spec, settings=settings)

    assert "Number(form.dataset.page)" in document
    assert "hidden.type = 'hidden';" in document
    assert "form.addEventListener('submit', onSubmit);" in document


@pytest.mark.parametrize("section", ["intro", "page3"])
def test_document_rejects_sections_no_page_reaches(settings: Settings, section: str) -> None:
    spec = FormSpec(
        form_id="f",
        action="/",
        fields=[
            FieldSpec(kind="text", name="a", page="page1"),
            FieldSpec(kind="text", name="b", page=section),
        ],
    )

    with pytest.raises(RenderError, match=section):
        build_document(spec, settings=settings)
