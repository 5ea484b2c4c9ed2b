"""Pytest marker auto-assignment by folder and shared form fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from formpages import logger
from formpages.settings import Settings
from formpages.typing.models import FormSpec

SAMPLES_DIR = Path(__file__).resolve().parents[1] / "samples"


def _mark_tests_by_directory(
    config: pytest.Config,
    items: list[pytest.Item],
    marker: str,
) -> None:
    """Mark collected tests located under tests/<marker>/."""
    target_dir = Path(config.rootpath) / "tests" / marker
    target_dir = target_dir.resolve()

    for item in items:
        try:
            path = Path(str(item.fspath)).resolve()
        except Exception:
            logger.warning(
                f"Could not resolve path for test item {item.name!s}; skipping {marker!s} marker assignment",
            )
            continue

        if path == target_dir or target_dir in path.parents:
            item.add_marker(getattr(pytest.mark, marker))


def pytest_collection_modifyitems(
    config: pytest.Config,
    items: list[pytest.Item],
) -> None:
    """Apply directory-based markers to test items."""
    _mark_tests_by_directory(config, items, "unit")
    _mark_tests_by_directory(config, items, "integration")
    _mark_tests_by_directory(config, items, "end2end")


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, log_json=False)


@pytest.fixture
def registration_spec() -> FormSpec:
    return FormSpec.model_validate_json((SAMPLES_DIR / "registration.json").read_text(encoding="utf-8"))
