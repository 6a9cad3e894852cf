from __future__ import annotations

import importlib
import os
import re
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from run_notifier.contracts.run_context import RunContext
from run_notifier.errors import ConfigError
from run_notifier.messaging.dispatcher import DEFAULT_CHANNEL_NAME, DEFAULT_TEAM_NAME
from run_notifier.messaging.graph import GRAPH_API_URL

_ENV_VAR_PATTERN = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


class RunSection(BaseModel):
    model_config = ConfigDict(extra="forbid")

    run_name: str = Field(min_length=1)
    project_name: str = Field(min_length=1)
    container_url: str = Field(min_length=1)
    upload_targets: list[str] = Field(default_factory=list)
    invalidate: bool = False
    forced: bool = False

    @field_validator("upload_targets", mode="before")
    @classmethod
    def _coerce_targets(cls, value: Any) -> list[str]:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value

    def to_context(self) -> RunContext:
        return RunContext(
            run_name=self.run_name,
            project_name=self.project_name,
            container_url=self.container_url,
            upload_targets=tuple(self.upload_targets),
            invalidate=self.invalidate,
            forced=self.forced,
        )


class StorageSection(BaseModel):
    model_config = ConfigDict(extra="forbid")

    backend: Literal["local"] = "local"
    root: str | None = None


class NotifySettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    enabled: bool = True
    team_name: str = DEFAULT_TEAM_NAME
    channel_name: str = DEFAULT_CHANNEL_NAME
    pings: list[str] = Field(default_factory=list)
    api_url: str = GRAPH_API_URL
    access_token: str | None = None
    timeout_s: float = Field(default=30.0, gt=0)


class NotifierConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    run: RunSection
    engine: str | None = None
    storage: StorageSection = Field(default_factory=StorageSection)
    validation_dir: str = "validation"
    notify: NotifySettings = Field(default_factory=NotifySettings)

    @field_validator("engine")
    @classmethod
    def _validate_engine_ref(cls, value: str | None) -> str | None:
        if value is not None and ":" not in value:
            raise ValueError("engine must be a 'module:callable' reference")
        return value


def load_yaml(path: str | Path) -> dict[str, Any]:
    with Path(path).open("r", encoding="utf-8") as handle:
        payload = yaml.safe_load(handle) or {}
    if not isinstance(payload, dict):
        raise ConfigError(f"YAML root must be a mapping: {path}")
    return payload


def load_notifier_config(path: str | Path) -> NotifierConfig:
    return load_notifier_config_dict(load_yaml(path))


def load_notifier_config_dict(payload: Mapping[str, Any]) -> NotifierConfig:
    resolved = resolve_env_vars(dict(payload))
    try:
        return NotifierConfig.model_validate(resolved)
    except ValidationError as exc:
        raise ConfigError(_format_validation_error("config", exc)) from exc


def resolve_env_vars(payload: Any) -> Any:
    return _resolve_env_vars(payload, path="$")


def _resolve_env_vars(payload: Any, *, path: str) -> Any:
    if isinstance(payload, Mapping):
        return {
            str(key): _resolve_env_vars(value, path=f"{path}.{key}")
            for key, value in payload.items()
        }
    if isinstance(payload, list):
        return [
            _resolve_env_vars(value, path=f"{path}[{index}]") for index, value in enumerate(payload)
        ]
    if isinstance(payload, str):
        return _substitute_env(payload, path=path)
    return payload


def _substitute_env(value: str, *, path: str) -> str:
    def replace(match: re.Match[str]) -> str:
        key = match.group(1)
        env_value = os.environ.get(key)
        if env_value is None:
            raise ConfigError(f"Missing environment variable '{key}' at {path}")
        return env_value

    return _ENV_VAR_PATTERN.sub(replace, value)


def load_factory(reference: str) -> Callable[[], Any]:
    """Import a `module:callable` reference and return the callable."""
    module_name, _, attr = reference.partition(":")
    if not module_name or not attr:
        raise ConfigError(f"Invalid factory reference '{reference}'")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ConfigError(f"Cannot import '{module_name}': {exc}") from exc
    factory = getattr(module, attr, None)
    if not callable(factory):
        raise ConfigError(f"'{reference}' is not a callable")
    return factory


def _format_validation_error(prefix: str, exc: ValidationError) -> str:
    details: list[str] = []
    for error in exc.errors(include_url=False):
        loc = ".".join(str(part) for part in error["loc"])
        details.append(f"{prefix}.{loc}: {error['msg']}")
    return "; ".join(details)
