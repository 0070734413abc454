"""Registry configuration — env-driven.

Centralized config using pydantic-settings for environment variable
support. Reads from .env file and ASSETREGISTRY_* environment variables.
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class RegistryConfig(BaseSettings):
    """Registry configuration with environment variable overrides.

    All settings can be overridden via ASSETREGISTRY_* environment variables
    or a .env file in the working directory.

    Examples
    --------
    Override via environment::

        export ASSETREGISTRY_ENVIRONMENT=staging
        export ASSETREGISTRY_LOG_LEVEL=DEBUG
        export ASSETREGISTRY_DB_PATH=/data/registry.db

    Or via .env file::

        ASSETREGISTRY_RATE_LIMIT_REQUESTS=100
        ASSETREGISTRY_STRICT_METADATA_UPDATES=true
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="ASSETREGISTRY_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Runtime environment
    environment: str = "development"
    log_level: str = "INFO"
    debug: bool = False

    # Storage
    db_path: Path = Path(".assetregistry/registry.db")
    in_memory: bool = False  # volatile store, tests and demos only

    # Rate limiting (per creator id, fixed window)
    rate_limit_enabled: bool = True
    rate_limit_requests: int = 10
    rate_limit_window_seconds: float = 60.0

    # Pagination
    default_page_limit: int = 10
    max_page_limit: int = 100

    # Forbid metadata updates on assets that are no longer ACTIVE
    strict_metadata_updates: bool = False

    # HTTP adapter
    host: str = "0.0.0.0"
    port: int = 8000

    @property
    def is_production(self) -> bool:
        """Whether running in production mode."""
        return self.environment == "production"


class ProductionConfigError(RuntimeError):
    """Raised when the configuration is unsafe for a production start."""


def enforce_production_constraints(cfg: RegistryConfig) -> None:
    """Refuse to start in production with debug on or a volatile store.

    Collects every violation and raises a single ``ProductionConfigError``.
    No-op outside production.
    """
    if not cfg.is_production:
        return

    violations: list[str] = []
    if cfg.debug:
        violations.append(
            "debug=True is not allowed in production. "
            "Set ASSETREGISTRY_DEBUG=false."
        )
    if cfg.in_memory:
        violations.append(
            "in_memory=True would lose all records on restart. "
            "Set ASSETREGISTRY_IN_MEMORY=false."
        )

    if violations:
        raise ProductionConfigError(
            "Production configuration guard failed.\n"
            + "\n".join(f"  - {v}" for v in violations)
        )


# Module-level singleton: import as `from assetregistry.config import config`
config = RegistryConfig()
