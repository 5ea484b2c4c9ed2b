"""Runtime settings loaded from `.env` and environment variables."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from formpages.exceptions import SettingsError

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Package settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    project_name: str = "formpages"
    app_env: str = Field(
        default="dev",
        validation_alias="APP_ENV",
        description="Application environment, e.g. 'dev', 'prod'.",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level, e.g. 'INFO', 'DEBUG'.",
    )
    log_json: bool = Field(
        default=True,
        validation_alias="LOG_JSON",
        description="Enable JSON formatted logs.",
    )
    log_file: str | None = Field(
        default=None,
        validation_alias="LOG_FILE",
        description="File path for log output.",
    )

    output_dir: str = Field(
        default="results",
        validation_alias="OUTPUT_DIR",
        description="Directory receiving generated documents.",
    )
    html_lang: str = Field(
        default="pt-BR",
        validation_alias="HTML_LANG",
        description="Value of the `lang` attribute of generated documents.",
    )
    page_title: str = Field(
        default="Formulário Gerado",
        validation_alias="PAGE_TITLE",
        description="Title of generated documents.",
    )
    previous_label: str = Field(
        default="Anterior",
        validation_alias="PREVIOUS_LABEL",
        description="Caption of the button moving back one page.",
    )
    next_label: str = Field(
        default="Próximo",
        validation_alias="NEXT_LABEL",
        description="Caption of the button moving forward one page.",
    )
    required_message: str = Field(
        default="Por favor, preencha o campo obrigatório: {label}",
        validation_alias="REQUIRED_MESSAGE",
        description="Message shown when a required field is empty; `{label}` is substituted.",
    )

    @field_validator("required_message")
    @classmethod
    def _validate_required_message(cls, value: str) -> str:
        """Ensure the required-field message names the field."""
        if "{label}" not in value:
            raise ValueError("REQUIRED_MESSAGE must contain a '{label}' placeholder")
        return value

    def format_required_message(self, label: str) -> str:
        """Return the user-facing message for an empty required field."""
        return self.required_message.replace("{label}", label)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance.

    Raises:
        SettingsError: If settings cannot be loaded or validated.

    Returns:
        Settings: The loaded settings instance.
    """
    try:
        return Settings()
    except Exception as exc:
        if _is_missing_settings_error(exc):
            ensure_env_file_exists()
            try:
                return Settings()
            except Exception as retry_exc:
                raise SettingsError(exc=retry_exc) from retry_exc
        raise SettingsError(exc=exc) from exc


def ensure_env_file_exists(
    *,
    env_path: Path = Path(".env"),
    template_path: Path = Path(".env.template"),
) -> None:
    """Create `.env` from template when missing.

    Args:
        env_path (Path): Target environment file path.
        template_path (Path): Template file path.
    """
    if env_path.exists() or not template_path.exists():
        return
    env_path.write_text(template_path.read_text(encoding="utf-8"), encoding="utf-8")
    logger.info(
        "Created environment file from template",
        extra={"env_path": str(env_path), "template_path": str(template_path)},
    )


def _is_missing_settings_error(exc: Exception) -> bool:
    """Return whether the settings failure is due to missing values.

    Args:
        exc (Exception): Caught settings initialization error.

    Returns:
        bool: True when the error represents missing settings values.
    """
    if not isinstance(exc, ValidationError):
        return False
    return any(error.get("type") == "missing" for error in exc.errors())
