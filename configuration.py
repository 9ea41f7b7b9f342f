"""
Application configuration module.

Loads all configuration values from environment variables with the prefix
HTTP_HELPERS_. Default values are provided for local development. A .env
file is also supported via pydantic-settings.
"""

import pydantic
import pydantic_settings


class HelpersConfiguration(pydantic_settings.BaseSettings):
    """
    Centralised configuration for the HTTP helpers demonstration service.

    Every field maps to an environment variable prefixed with HTTP_HELPERS_.
    For example, the field ``non_body_request_methods`` is populated from
    the environment variable HTTP_HELPERS_NON_BODY_REQUEST_METHODS.
    """

    # ── Application settings ─────────────────────────────────────────────

    application_host: str = "127.0.0.1"

    application_port: int = pydantic.Field(default=8000, ge=1, le=65535)

    log_level: str = pydantic.Field(
        default="INFO",
        description=(
            "Minimum log level for structured JSON logging. "
            "Accepted values: DEBUG, INFO, WARNING, ERROR, CRITICAL."
        ),
    )

    # ── Body parsing settings ────────────────────────────────────────────

    non_body_request_methods: list[str] = pydantic.Field(
        default=["GET", "HEAD", "OPTIONS"],
        description=(
            "HTTP methods whose requests are never body-parsed, as a JSON "
            "list. Example: '[\"GET\", \"HEAD\", \"OPTIONS\", \"DELETE\"]'."
        ),
    )

    @pydantic.field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, log_level: str) -> str:
        normalised_log_level = log_level.upper()
        if normalised_log_level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unsupported log level: {log_level!r}")
        return normalised_log_level

    @pydantic.field_validator("non_body_request_methods")
    @classmethod
    def _normalise_request_methods(cls, request_methods: list[str]) -> list[str]:
        return [request_method.strip().upper() for request_method in request_methods]

    model_config = pydantic_settings.SettingsConfigDict(
        env_file=".env",
        env_prefix="HTTP_HELPERS_",
    )
