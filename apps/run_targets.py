from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any

from run_notifier.api import run_from_config
from run_notifier.configuration import NotifierConfig, load_notifier_config_dict, load_yaml
from run_notifier.contracts import RunPhase
from run_notifier.errors import ConfigError
from run_notifier.runtime.console import configure_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run a step graph, upload its outputs and post the outcome to Teams."
    )
    parser.add_argument("config_yaml", type=Path, nargs="?", help="Path to run YAML")
    parser.add_argument("--run-name", help="Run name (overrides config)")
    parser.add_argument("--project-name", help="Project name (overrides config)")
    parser.add_argument("--container-url", help="Storage container URL (overrides config)")
    parser.add_argument(
        "--upload-target",
        dest="upload_targets",
        action="append",
        default=None,
        help="Step whose value should be uploaded; repeatable",
    )
    parser.add_argument("--invalidate", action="store_true", default=None)
    parser.add_argument(
        "--forced",
        action="store_true",
        default=None,
        help="Invalidate cached results and overwrite stored artifacts",
    )
    parser.add_argument("--engine", help="Engine factory as 'module:callable'")
    parser.add_argument("--ping", dest="pings", action="append", default=None)
    parser.add_argument("--no-notify", action="store_true")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> NotifierConfig:
    payload: dict[str, Any] = load_yaml(args.config_yaml) if args.config_yaml is not None else {}
    run = dict(payload.get("run") or {})
    notify = dict(payload.get("notify") or {})

    for key in ("run_name", "project_name", "container_url", "upload_targets", "invalidate", "forced"):
        value = getattr(args, key)
        if value is not None:
            run[key] = value
    if args.engine:
        payload["engine"] = args.engine
    if args.pings:
        notify["pings"] = list(args.pings)
    if args.no_notify:
        notify["enabled"] = False
    if "access_token" not in notify and os.environ.get("GRAPH_ACCESS_TOKEN"):
        notify["access_token"] = os.environ["GRAPH_ACCESS_TOKEN"]

    payload["run"] = run
    payload["notify"] = notify
    return load_notifier_config_dict(payload)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        config = build_config(args)
        outcome = run_from_config(config)
    except ConfigError as exc:
        logging.getLogger("run_notifier.cli").error("%s", exc)
        return 2

    return 1 if outcome.phase is RunPhase.FAILED else 0


if __name__ == "__main__":
    sys.exit(main())
