"""Form configuration files and generated document persistence."""

from __future__ import annotations

import json
from pathlib import Path
from typing import cast

from pydantic import ValidationError

from formpages import logger
from formpages.exceptions import FormSpecError
from formpages.typing.models import FormSpec

_FORM_FILE_VERSION = 1


def load_form_spec(path: Path) -> FormSpec:
    """Load a form configuration from a JSON file.

    Both bare configuration objects and versioned envelopes are accepted.

    Args:
        path (Path): Configuration file path.

    Raises:
        FormSpecError: If the file is missing, not JSON, or not a valid configuration.

    Returns:
        FormSpec: Loaded configuration.
    """
    if not path.is_file():
        raise FormSpecError(message=f"Form configuration is not a file: {path}")

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise FormSpecError(message=f"Form configuration is not valid JSON: {path}: {exc}") from exc

    form_object = _unwrap_form_payload(payload)
    try:
        form_spec = FormSpec.model_validate(form_object)
    except ValidationError as exc:
        raise FormSpecError(message=f"Invalid form configuration {path}: {exc}") from exc

    logger.debug("Form configuration loaded", path=str(path), fields=len(form_spec.fields))
    return form_spec


def save_form_spec(form_spec: FormSpec, path: Path) -> Path:
    """Persist a form configuration inside a versioned envelope.

    Args:
        form_spec (FormSpec): Configuration to write.
        path (Path): Target file path.

    Returns:
        Path: Written file path.
    """
    envelope = {
        "form_file_version": _FORM_FILE_VERSION,
        "form": form_spec.model_dump(mode="json", by_alias=True, exclude_none=True),
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(envelope, indent=2, ensure_ascii=False), encoding="utf-8")
    logger.info("Form configuration saved", path=str(path))
    return path


def write_document(markup: str, path: Path) -> Path:
    """Write generated markup to disk.

    Args:
        markup (str): Generated HTML.
        path (Path): Target file path.

    Returns:
        Path: Written file path.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(markup, encoding="utf-8")
    logger.info("Document written", path=str(path), size=len(markup))
    return path


def _unwrap_form_payload(payload: object) -> dict[str, object]:
    """Return the configuration object from a bare or enveloped payload.

    Args:
        payload (object): Raw JSON payload.

    Raises:
        FormSpecError: If the payload is not a JSON object or uses an unknown envelope version.

    Returns:
        dict[str, object]: Configuration object.
    """
    if not isinstance(payload, dict):
        raise FormSpecError(message="Form configuration must be a JSON object")

    payload_obj = cast("dict[str, object]", payload)
    if "form_file_version" not in payload_obj:
        return payload_obj

    version = payload_obj["form_file_version"]
    if version != _FORM_FILE_VERSION:
        raise FormSpecError(message=f"Unsupported form file version: {version!r}")
    embedded = payload_obj.get("form")
    if not isinstance(embedded, dict):
        raise FormSpecError(message="Form envelope must contain a 'form' object")
    return cast("dict[str, object]", embedded)
