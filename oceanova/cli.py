"""CLI entry point for the marine advisory engine."""

import argparse
import logging
from pathlib import Path

from oceanova.config.loader import get_config_value, load_config
from oceanova.config.locations import default_location, resolve_location
from oceanova.config.schema import AppConfig
from oceanova.daemon import RefreshDaemon
from oceanova.errors import ConfigurationError, LocationNotFoundError, RefreshError
from oceanova.pipeline.refresh_orchestrator import RefreshOrchestrator
from oceanova.reporting.formatters import format_cycle_text, format_state_json

DEFAULT_CONFIG = "ops/configs/default.yaml"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="oceanova",
        description="Marine weather hazard alerts and vessel advisories",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )

    sub = parser.add_subparsers(dest="command")

    # refresh
    refresh_p = sub.add_parser("refresh", help="Run one refresh cycle")
    refresh_p.add_argument("--location", help="Location name")
    refresh_p.add_argument("--json", action="store_true", help="Print published state as JSON")

    # daemon
    daemon_p = sub.add_parser("daemon", help="Refresh periodically until stopped")
    daemon_p.add_argument("--location", help="Location name")
    daemon_p.add_argument(
        "--interval", type=float, help="Seconds between cycles (default from config)"
    )

    # serve
    serve_p = sub.add_parser("serve", help="Run the state API with a refresh daemon")
    serve_p.add_argument("--host", default="127.0.0.1")
    serve_p.add_argument("--port", type=int, default=8000)

    # locations
    sub.add_parser("locations", help="List known locations")

    # config show
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    get_p = config_sub.add_parser("get", help="Print one config value")
    get_p.add_argument("key", help="Dotted key, e.g. advisory.retry.max_attempts")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config_path = Path(args.config)
    try:
        config = load_config(config_path if config_path.exists() else None)
    except ConfigurationError as e:
        print(f"Error: {e}")
        return 1

    if args.command == "refresh":
        return _cmd_refresh(config, args)
    elif args.command == "daemon":
        return _cmd_daemon(config, args)
    elif args.command == "serve":
        return _cmd_serve(config, args)
    elif args.command == "locations":
        return _cmd_locations(config)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _orchestrator(config: AppConfig, location_name: str | None) -> RefreshOrchestrator:
    orchestrator = RefreshOrchestrator(config)
    if location_name:
        orchestrator.select_location(resolve_location(config, location_name))
    return orchestrator


def _cmd_refresh(config, args) -> int:
    try:
        orchestrator = _orchestrator(config, args.location)
    except LocationNotFoundError as e:
        print(f"Error: {e}")
        return 1
    try:
        result = orchestrator.run_cycle(orchestrator.location)
    except RefreshError as e:
        print(f"Error: {e.user_message}")
        return 1
    if result is None:
        return 1
    if args.json:
        print(format_state_json(orchestrator.state))
    else:
        print(format_cycle_text(result))
    return 0


def _cmd_daemon(config, args) -> int:
    try:
        orchestrator = _orchestrator(config, args.location)
    except LocationNotFoundError as e:
        print(f"Error: {e}")
        return 1
    interval = args.interval or config.refresh.interval_ms / 1000
    daemon = RefreshDaemon(orchestrator, interval=interval)
    print(
        f"Refresh daemon started ({orchestrator.location.name}, every {interval:.0f}s). "
        "Ctrl-C to stop."
    )
    daemon.run_forever()
    return 0


def _cmd_serve(config, args) -> int:
    import uvicorn

    from oceanova.dashboard import create_app

    orchestrator = RefreshOrchestrator(config)
    daemon = RefreshDaemon(orchestrator, interval=config.refresh.interval_ms / 1000)
    daemon.start()
    try:
        uvicorn.run(create_app(orchestrator, daemon), host=args.host, port=args.port)
    finally:
        daemon.stop()
    return 0


def _cmd_locations(config) -> int:
    default = default_location(config).name
    for loc in config.locations:
        marker = " (default)" if loc.name == default else ""
        print(f"{loc.name}: {loc.latitude}, {loc.longitude}{marker}")
    return 0


def _cmd_config(config, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "get":
        try:
            print(get_config_value(config, args.key))
            return 0
        except (KeyError, IndexError, ValueError) as e:
            print(f"Error: {e}")
            return 1
    print("Use: config show | config get key")
    return 1
