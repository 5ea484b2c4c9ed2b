from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from formpages.exceptions import FormSpecError
from formpages.form_store import load_form_spec, save_form_spec, write_document

if TYPE_CHECKING:
    from pathlib import Path

    from formpages.typing.models import FormSpec


def test_save_and_load_form_spec(tmp_path: Path, registration_spec: FormSpec) -> None:
    path = save_form_spec(registration_spec, tmp_path / "forms" / "registration.json")

    assert load_form_spec(path) == registration_spec


def test_save_uses_versioned_envelope(tmp_path: Path, registration_spec: FormSpec) -> None:
    path = save_form_spec(registration_spec, tmp_path / "registration.json")
    payload = json.loads(path.read_text(encoding="utf-8"))

    assert payload["form_file_version"] == 1
    assert payload["form"]["formId"] == "meuFormulario"
    assert payload["form"]["fields"][1]["minlength"] == 6


def test_load_bare_configuration(tmp_path: Path) -> None:
    path = tmp_path / "form.json"
    path.write_text(
        json.dumps({"formId": "f", "action": "/", "fields": [{"type": "text", "name": "a", "section": "page1"}]}),
        encoding="utf-8",
    )

    form_spec = load_form_spec(path)

    assert form_spec.method == "POST"
    assert form_spec.fields[0].name == "a"


def test_load_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FormSpecError, match="not a file"):
        load_form_spec(tmp_path / "missing.json")


def test_load_invalid_json_raises(tmp_path: Path) -> None:
    path = tmp_path / "form.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(FormSpecError, match="not valid JSON"):
        load_form_spec(path)


def test_load_non_object_raises(tmp_path: Path) -> None:
    path = tmp_path / "form.json"
    path.write_text("[]", encoding="utf-8")

    with pytest.raises(FormSpecError, match="must be a JSON object"):
        load_form_spec(path)


def test_load_unknown_envelope_version_raises(tmp_path: Path) -> None:
    path = tmp_path / "form.json"
    path.write_text(json.dumps({"form_file_version": 9, "form": {}}), encoding="utf-8")

    with pytest.raises(FormSpecError, match="Unsupported form file version"):
        load_form_spec(path)


def test_load_invalid_configuration_raises(tmp_path: Path) -> None:
    path = tmp_path / "form.json"
    path.write_text(json.dumps({"formId": "f", "fields": []}), encoding="utf-8")

    with pytest.raises(FormSpecError, match="Invalid form configuration"):
        load_form_spec(path)


def test_write_document_creates_parent_dirs(tmp_path: Path) -> None:
    path = write_document("<form></form>\n", tmp_path / "out" / "form.html")

    assert path.read_text(encoding="utf-8") == "<form></form>\n"
