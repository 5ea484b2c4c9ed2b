from formpages.exceptions import (
    FormSpecError,
    PackageError,
    RenderError,
    SettingsError,
)


def test_root_exception_hierarchy() -> None:
    assert issubclass(SettingsError, PackageError)
    assert issubclass(FormSpecError, PackageError)
    assert issubclass(RenderError, PackageError)


def test_settings_error_includes_cause() -> None:
    error = SettingsError(exc=ValueError("boom"))
    assert str(error) == "Failed to load settings: boom"
