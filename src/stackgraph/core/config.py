# src/stackgraph/core/config.py
"""
Configuration schema and loading for stackgraph.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.
"""

import re
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator, model_validator

from stackgraph.core.graph.validators import KnownProvidersValidator, UniqueNamesValidator, Validator

ValidatorName = Literal["unique_names", "known_providers"]


class LoggingSettings(BaseModel):
    """Logging output configuration."""

    model_config = {"frozen": True, "extra": "forbid"}

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Root log level",
    )
    json_output: bool = Field(
        default=False,
        description="Emit JSON log lines instead of console output",
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.upper()
        return v


class StackgraphSettings(BaseModel):
    """Top-level stackgraph configuration.

    Example YAML:
        graph_path: deps.json
        providers: [objectstore, cache, queuestore, smbdriver]
        include_declared_names: true
        checks: [unique_names, known_providers]
    """

    model_config = {"frozen": True, "extra": "forbid"}

    graph_path: Path | None = Field(
        default=None,
        description="Dependency graph document (JSON)",
    )
    providers: list[str] = Field(
        default_factory=list,
        description="Known infrastructure providers that dependencies may reference",
    )
    include_declared_names: bool = Field(
        default=False,
        description="Treat declared entry names as known providers too",
    )
    checks: list[ValidatorName] = Field(
        default_factory=lambda: ["unique_names"],
        description="Validators applied when loading, in order",
    )
    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Logging output configuration",
    )

    @field_validator("providers")
    @classmethod
    def validate_provider_names(cls, v: list[str]) -> list[str]:
        """Provider names must be non-empty."""
        if any(not name for name in v):
            raise ValueError("provider names must be non-empty strings")
        return v

    @field_validator("checks")
    @classmethod
    def validate_checks_unique(cls, v: list[str]) -> list[str]:
        """Each validator may appear once."""
        duplicates = sorted({name for name in v if v.count(name) > 1})
        if duplicates:
            raise ValueError(f"duplicate checks: {duplicates}")
        return v

    @model_validator(mode="after")
    def validate_known_providers_has_providers(self) -> "StackgraphSettings":
        """known_providers with an empty provider set would reject every dependency."""
        if "known_providers" in self.checks and not self.providers and not self.include_declared_names:
            raise ValueError("known_providers check requires 'providers' or include_declared_names: true")
        return self


def build_validators(settings: StackgraphSettings) -> list[Validator]:
    """Build the loader validator chain in the configured order."""
    chain: list[Validator] = []
    for name in settings.checks:
        if name == "unique_names":
            chain.append(UniqueNamesValidator())
        elif name == "known_providers":
            chain.append(
                KnownProvidersValidator(
                    settings.providers,
                    include_declared=settings.include_declared_names,
                )
            )
    return chain


# Regex pattern for ${VAR} or ${VAR:-default} syntax
_ENV_VAR_PATTERN = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)(?::-([^}]*))?\}")


def _expand_env_vars(config: dict[str, Any]) -> dict[str, Any]:
    """Recursively expand ${VAR} and ${VAR:-default} patterns in config values.

    Unset variables without a default are left as-is.
    """
    import os

    def replacer(match: re.Match[str]) -> str:
        env_value = os.environ.get(match.group(1))
        if env_value is not None:
            return env_value
        default = match.group(2)
        if default is not None:
            return default
        return match.group(0)

    def _expand_value(value: Any) -> Any:
        if isinstance(value, str):
            return _ENV_VAR_PATTERN.sub(replacer, value)
        elif isinstance(value, dict):
            return {k: _expand_value(v) for k, v in value.items()}
        elif isinstance(value, list):
            return [_expand_value(item) for item in value]
        else:
            return value

    return {k: _expand_value(v) for k, v in config.items()}


def _lowercase_keys(value: Any) -> Any:
    """Dynaconf uppercases keys at every level; Pydantic fields are lowercase."""
    if isinstance(value, dict):
        return {str(k).lower(): _lowercase_keys(v) for k, v in value.items()}
    return value


def load_settings(config_path: Path) -> StackgraphSettings:
    """Load settings from a YAML file with environment variable overrides.

    Precedence:
    1. Environment variables (STACKGRAPH_*) - highest priority
    2. Config file
    3. Defaults from the Pydantic schema - lowest priority

    Nested keys use a double underscore: STACKGRAPH_LOGGING__LEVEL=DEBUG.

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If the config file doesn't exist
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="STACKGRAPH",
        settings_files=[str(config_path)],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {k: v for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys}
    raw_config = _lowercase_keys(raw_config)
    raw_config = _expand_env_vars(raw_config)

    return StackgraphSettings(**raw_config)
