from __future__ import annotations

import logging
import time
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

from run_notifier.cards.builder import build_project_card
from run_notifier.configuration import (
    NotifierConfig,
    NotifySettings,
    load_factory,
    load_notifier_config,
)
from run_notifier.contracts import (
    ArtifactStore,
    DispatchResult,
    EngineErr,
    EngineOk,
    EngineOutcome,
    ExecutionEngine,
    RunContext,
    RunOutcome,
    RunPhase,
    RunReport,
)
from run_notifier.errors import ConfigError, EngineExecutionError
from run_notifier.messaging.dispatcher import TeamsNotifier
from run_notifier.messaging.graph import GraphDirectory, GraphSession
from run_notifier.reporting.classifier import classify_report
from run_notifier.storage.local import LocalArtifactStore

logger = logging.getLogger("run_notifier.run")

ABORT_WINDOW_S = 5.0


def run_targets(
    context: RunContext,
    *,
    engine: ExecutionEngine,
    store: ArtifactStore,
    notifier: TeamsNotifier | None = None,
    notify: NotifySettings | None = None,
    validation_dir: str | Path = "validation",
    sleep: Callable[[float], None] = time.sleep,
) -> RunOutcome:
    """
    Run the step graph, store its outputs and post the outcome card.

    Engine failures end the run in FAILED without raising. Upload failures
    propagate. Notification failures are logged and never change the outcome.
    """
    settings = notify or NotifySettings()
    start = datetime.now(UTC)
    phases: list[RunPhase] = [RunPhase.IDLE]
    log_extra = {"run_name": context.run_name, "project_name": context.project_name}

    def enter(phase: RunPhase) -> None:
        phases.append(phase)
        logger.debug("Entering phase %s", phase, extra={**log_extra, "phase": str(phase)})

    def finish(phase: RunPhase, **fields) -> RunOutcome:
        end = datetime.now(UTC)
        return RunOutcome(
            run_name=context.run_name,
            phase=phase,
            phases=tuple(phases),
            started_at_utc=start.isoformat(),
            ended_at_utc=end.isoformat(),
            duration_s=(end - start).total_seconds(),
            **fields,
        )

    logger.info("Starting run '%s'...", context.run_name, extra={**log_extra, "event": "run_started"})

    if context.forced:
        enter(RunPhase.INVALIDATING)
        _invalidate(engine, sleep=sleep, log_extra=log_extra)
    elif context.invalidate:
        logger.warning(
            "invalidate=True has no effect without forced=True; cached results are kept",
            extra={**log_extra, "event": "invalidate_ignored"},
        )

    enter(RunPhase.RUNNING)
    outcome = _execute(engine, log_extra=log_extra)

    enter(RunPhase.EVALUATING)
    if isinstance(outcome, EngineErr):
        enter(RunPhase.FAILED)
        logger.error(
            "Engine run failed! %s",
            outcome.error,
            extra={**log_extra, "event": "run_failed"},
        )
        return finish(RunPhase.FAILED, error=str(outcome.error))

    report = outcome.report
    if report.all_skipped():
        enter(RunPhase.SKIPPED_NOOP)
        logger.warning(
            "Nothing to do. Do you need to invalidate the previous run?",
            extra={**log_extra, "event": "run_skipped"},
        )
        return finish(RunPhase.SKIPPED_NOOP, report=report)

    logger.info("Run successful!", extra={**log_extra, "event": "run_succeeded"})

    enter(RunPhase.UPLOADING)
    uploaded = store_run_data(
        context,
        engine=engine,
        store=store,
        report=report,
        validation_dir=validation_dir,
    )

    enter(RunPhase.NOTIFYING)
    status = classify_report(report)
    dispatch = _notify(context, report, notifier=notifier, settings=settings, log_extra=log_extra)

    enter(RunPhase.DONE)
    logger.info("Done.", extra={**log_extra, "event": "run_done"})
    return finish(
        RunPhase.DONE,
        report=report,
        status=status,
        dispatch=dispatch,
        uploaded=tuple(uploaded),
        error=dispatch.error if dispatch is not None and not dispatch.ok else None,
    )


def store_run_data(
    context: RunContext,
    *,
    engine: ExecutionEngine,
    store: ArtifactStore,
    report: RunReport,
    validation_dir: str | Path = "validation",
) -> list[str]:
    """
    Store upload targets, then the validation folder, then the run report.

    Returns the remote paths written. Any store failure propagates immediately.
    """
    blob_path = context.blob_path
    uploaded: list[str] = []

    for target_name in context.upload_targets:
        logger.info("Uploading '%s'...", target_name, extra={"event": "upload", "target": target_name})
        remote = f"{blob_path}/{target_name}"
        store.store_object(
            engine.read_artifact(target_name),
            remote,
            context.container_url,
            forced=context.forced,
        )
        uploaded.append(remote)

    logger.info("Uploading validation files...", extra={"event": "upload", "target": "validation"})
    remote = f"{blob_path}/validation"
    store.store_folder(validation_dir, remote, context.container_url, forced=context.forced)
    uploaded.append(remote)

    logger.info("Uploading metadata...", extra={"event": "upload", "target": "run_report"})
    remote = f"{blob_path}/run_report"
    store.store_object(report.to_frame(), remote, context.container_url, forced=context.forced)
    uploaded.append(remote)

    return uploaded


def run_from_yaml(
    config_yaml: str | Path,
    *,
    engine: ExecutionEngine | None = None,
    store: ArtifactStore | None = None,
    notifier: TeamsNotifier | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> RunOutcome:
    config = load_notifier_config(config_yaml)
    return run_from_config(config, engine=engine, store=store, notifier=notifier, sleep=sleep)


def run_from_config(
    config: NotifierConfig,
    *,
    engine: ExecutionEngine | None = None,
    store: ArtifactStore | None = None,
    notifier: TeamsNotifier | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> RunOutcome:
    """Build collaborators missing from the call out of `config`, then run."""
    if engine is None:
        if config.engine is None:
            raise ConfigError("No engine given and config.engine is not set")
        engine = load_factory(config.engine)()
    if store is None:
        store = LocalArtifactStore(
            store_root=Path(config.storage.root) if config.storage.root else None
        )
    if notifier is None and config.notify.enabled:
        notifier = build_notifier(config.notify)

    return run_targets(
        config.run.to_context(),
        engine=engine,
        store=store,
        notifier=notifier,
        notify=config.notify,
        validation_dir=config.validation_dir,
        sleep=sleep,
    )


def build_notifier(settings: NotifySettings) -> TeamsNotifier:
    if not settings.access_token:
        raise ConfigError("notify.access_token is required when notifications are enabled")
    session = GraphSession(
        access_token=settings.access_token,
        api_url=settings.api_url,
        timeout_s=settings.timeout_s,
    )
    return TeamsNotifier(
        GraphDirectory(session),
        api_url=settings.api_url,
        timeout_s=settings.timeout_s,
    )


def _invalidate(
    engine: ExecutionEngine,
    *,
    sleep: Callable[[float], None],
    log_extra: dict[str, str],
) -> None:
    logger.warning(
        "*** THIS WILL OVERWRITE THE OLD DATA, YOU HAVE %d SECONDS TO ABORT ***",
        ABORT_WINDOW_S,
        extra={**log_extra, "event": "abort_window"},
    )
    sleep(ABORT_WINDOW_S)
    logger.warning("Invalidating old data...", extra={**log_extra, "event": "invalidate"})
    engine.invalidate_all()


def _execute(engine: ExecutionEngine, *, log_extra: dict[str, str]) -> EngineOutcome:
    logger.info("Running targets...", extra={**log_extra, "event": "engine_run"})
    try:
        engine.run()
        report = engine.progress()
    except Exception as exc:
        return EngineErr(error=_as_engine_error(exc))
    return EngineOk(report=report)


def _as_engine_error(exc: Exception) -> EngineExecutionError:
    if isinstance(exc, EngineExecutionError):
        return exc
    error = EngineExecutionError(f"{type(exc).__name__}: {exc}")
    error.__cause__ = exc
    return error


def _notify(
    context: RunContext,
    report: RunReport,
    *,
    notifier: TeamsNotifier | None,
    settings: NotifySettings,
    log_extra: dict[str, str],
) -> DispatchResult | None:
    if notifier is None or not settings.enabled:
        logger.info("Notifications disabled; not sending a card.", extra=log_extra)
        return None

    payload = build_project_card(context.run_name, context.project_name, report)
    try:
        return notifier.send(
            payload,
            channel_name=settings.channel_name,
            team_name=settings.team_name,
            pings=settings.pings or None,
        )
    except Exception as exc:
        logger.error(
            "Could not notify channel '%s': %s",
            settings.channel_name,
            exc,
            exc_info=True,
            extra={**log_extra, "event": "notify_failed"},
        )
        return DispatchResult(ok=False, error=str(exc))
