from pathlib import Path
from typing import Any

import pytest
import yaml

from run_notifier.configuration import (
    load_factory,
    load_notifier_config,
    load_notifier_config_dict,
)
from run_notifier.errors import ConfigError


def _write_yaml(path: Path, payload: dict[str, Any]) -> None:
    path.write_text(yaml.safe_dump(payload, sort_keys=False), encoding="utf-8")


def test_load_notifier_config_resolves_env_and_applies_defaults(tmp_path, monkeypatch):
    monkeypatch.setenv("GRAPH_ACCESS_TOKEN", "secret-token")
    config_path = tmp_path / "run.yaml"
    _write_yaml(
        config_path,
        {
            "run": {
                "run_name": "nightly",
                "project_name": "housing",
                "container_url": "file:///data",
                "upload_targets": ["model"],
                "forced": True,
            },
            "engine": "my_pipeline:build_engine",
            "notify": {"access_token": "${GRAPH_ACCESS_TOKEN}", "pings": ["a@x.com"]},
        },
    )

    config = load_notifier_config(config_path)

    assert config.notify.access_token == "secret-token"
    assert config.notify.team_name == "Insights"
    assert config.notify.channel_name == "Bots Health Check"
    assert config.notify.api_url == "https://graph.microsoft.com/v1.0"
    assert config.validation_dir == "validation"
    context = config.run.to_context()
    assert context.upload_targets == ("model",)
    assert context.forced is True
    assert context.invalidate is False
    assert context.blob_path == "housing/nightly"


def test_missing_env_var_is_a_config_error():
    with pytest.raises(ConfigError, match="NOT_SET_ANYWHERE"):
        load_notifier_config_dict(
            {
                "run": {"run_name": "r", "project_name": "p", "container_url": "${NOT_SET_ANYWHERE}"},
            }
        )


def test_validation_errors_are_reported_with_paths():
    with pytest.raises(ConfigError) as excinfo:
        load_notifier_config_dict({"run": {"run_name": "r"}, "surprise": 1})

    message = str(excinfo.value)
    assert "config.run.project_name" in message
    assert "config.surprise" in message


def test_engine_reference_must_name_a_callable():
    with pytest.raises(ConfigError, match="module:callable"):
        load_notifier_config_dict(
            {
                "run": {"run_name": "r", "project_name": "p", "container_url": "c"},
                "engine": "just_a_module",
            }
        )


def test_yaml_root_must_be_mapping(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="mapping"):
        load_notifier_config(path)


def test_load_factory_imports_module_attribute():
    factory = load_factory("run_notifier.testkit:FakeExecutionEngine")

    assert factory().progress().names == []


def test_load_factory_rejects_missing_targets():
    with pytest.raises(ConfigError):
        load_factory("run_notifier.testkit:DoesNotExist")
    with pytest.raises(ConfigError):
        load_factory("no_such_module_anywhere:build")


def test_example_config_loads_without_graph_token(monkeypatch):
    monkeypatch.delenv("GRAPH_ACCESS_TOKEN", raising=False)
    example = Path(__file__).resolve().parents[1] / "configs" / "run.example.yaml"

    config = load_notifier_config(example)

    assert config.notify.access_token is None
    assert config.run.upload_targets == ["model", "summary"]
