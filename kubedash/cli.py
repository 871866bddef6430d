"""Command line entry point for KubeDash."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from pydantic import ValidationError

from kubedash.constants import APP_TITLE, APP_VERSION
from kubedash.constants.values import CONFIG_DIR_NAME, LOG_FILE_NAME
from kubedash.models.state.app_settings import AppSettings, ConfigLoadError, ConfigSaveError
from kubedash.models.state.config_manager import ConfigManager

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kubedash",
        description=f"{APP_TITLE}: a live terminal dashboard for Kubernetes",
    )
    parser.add_argument("--context", help="Kubeconfig context to use (default: current)")
    parser.add_argument(
        "-n",
        "--namespace",
        help='Namespace to watch, or "all" (default: all)',
    )
    parser.add_argument(
        "-p",
        "--poll-rate",
        type=int,
        help="Refresh interval in milliseconds; must be a multiple of the tick rate",
    )
    parser.add_argument(
        "-t",
        "--tick-rate",
        type=int,
        help="UI tick rate in milliseconds; must be less than 1000",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Settings file (default: ~/.kubedash/settings.yaml)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Log file (default: ~/.kubedash/kubedash.log)",
    )
    parser.add_argument(
        "--save-config",
        action="store_true",
        help="Write the effective settings to the settings file and exit",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    return parser


def configure_logging(log_file: Path | None, debug: bool = False) -> Path:
    """Send logs to a file; the terminal belongs to the TUI."""
    path = log_file or Path.home() / CONFIG_DIR_NAME / LOG_FILE_NAME
    path.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=str(path),
        level=logging.DEBUG if debug else logging.INFO,
        format=_LOG_FORMAT,
        force=True,
    )
    return path


def resolve_settings(args: argparse.Namespace) -> AppSettings:
    """Load settings from disk and apply command line overrides.

    Raises:
        ValidationError: The overrides produce invalid settings.
    """
    try:
        settings = ConfigManager.load(args.config)
    except ConfigLoadError as exc:
        logger.warning("%s; using default settings", exc)
        settings = AppSettings()

    overrides = {
        "initial_context": args.context,
        "initial_namespace": args.namespace,
        "poll_rate_ms": args.poll_rate,
        "tick_rate_ms": args.tick_rate,
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}
    if not overrides:
        return settings
    return AppSettings.model_validate({**settings.model_dump(), **overrides})


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    log_path = configure_logging(args.log_file, args.debug)

    try:
        settings = resolve_settings(args)
    except ValidationError as exc:
        messages = "; ".join(error["msg"] for error in exc.errors())
        parser.error(messages)

    if args.save_config:
        try:
            path = ConfigManager.save(settings, args.config)
        except ConfigSaveError as exc:
            logger.error("%s", exc)
            parser.exit(1, f"kubedash: {exc}\n")
        logger.info("Saved settings to %s", path)
        print(f"Saved settings to {path}")
        return 0

    logger.info(
        "Starting %s %s (context=%s, namespace=%s, poll=%sms, log=%s)",
        APP_TITLE,
        APP_VERSION,
        settings.initial_context or "<current>",
        settings.initial_namespace,
        settings.poll_rate_ms,
        log_path,
    )

    from kubedash.app import KubeDashApp

    KubeDashApp(settings=settings).run()
    return 0


__all__ = ["build_parser", "configure_logging", "main", "resolve_settings"]
