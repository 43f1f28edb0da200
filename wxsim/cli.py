"""CLI entry point for the weather playback simulator."""

import argparse
import logging

from pydantic import ValidationError

from wxsim.config.loader import (
    get_config_value,
    load_config,
    save_config,
    set_config_value,
)
from wxsim.models.common import local_now
from wxsim.playback.builder import build_loop
from wxsim.reporting.formatters import format_snapshot_json, format_snapshot_text
from wxsim.storage import generation_repo
from wxsim.storage.database import connect, run_migrations

DEFAULT_CONFIG = "ops/configs/default.yaml"
DEFAULT_DB = "data/wxsim.db"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="wxsim",
        description="Simulated 24-hour weather timeline with real-time playback",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )
    parser.add_argument("--db", default=DEFAULT_DB, help="SQLite DB path")

    sub = parser.add_subparsers(dest="command")

    # generate
    sub.add_parser("generate", help="Regenerate today's forecast now")

    # show
    show_p = sub.add_parser("show", help="Show the current snapshot")
    show_p.add_argument("--json", action="store_true", help="Emit JSON")

    # play / stop / status
    play_p = sub.add_parser("play", help="Run the playback loop in the foreground")
    play_p.add_argument(
        "--interval", type=float, default=None, help="Seconds between ticks"
    )
    sub.add_parser("stop", help="Stop a running playback daemon")
    sub.add_parser("status", help="Show playback daemon status")

    # history
    hist_p = sub.add_parser("history", help="List recent regenerations")
    hist_p.add_argument("--limit", type=int, default=20)

    # serve
    serve_p = sub.add_parser("serve", help="Serve the dashboard API")
    serve_p.add_argument("--host", default="127.0.0.1")
    serve_p.add_argument("--port", type=int, default=8777)

    # config show / config set
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    set_p = config_sub.add_parser("set", help="Set a config value")
    set_p.add_argument("keyvalue", help="key=value to set")
    set_p.add_argument(
        "--write", action="store_true", help="Save the result back to the config file"
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Daemon control does not need a valid config
    if args.command == "stop":
        from wxsim.daemon import stop_daemon

        return stop_daemon()
    if args.command == "status":
        from wxsim.daemon import daemon_status

        return daemon_status()

    try:
        config = load_config(args.config)
    except FileNotFoundError:
        print(f"Error: config file not found: {args.config}")
        return 1
    except (ValidationError, ValueError) as e:
        print(f"Error: invalid config {args.config}: {e}")
        return 1

    if args.command == "generate":
        return _cmd_generate(config, args)
    elif args.command == "show":
        return _cmd_show(config, args)
    elif args.command == "play":
        return _cmd_play(config, args)
    elif args.command == "history":
        return _cmd_history(args)
    elif args.command == "serve":
        return _cmd_serve(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _cmd_generate(config, args) -> int:
    conn = connect(args.db)
    try:
        loop = build_loop(config, conn)
        state = loop.regenerate(local_now())
        print(
            f"Generated forecast v{state.version} for {state.forecast_date} "
            f"({state.front.value} front, {state.forecast.min_temp}..{state.forecast.max_temp}°C)"
        )
        for w in state.warnings:
            print(f"  [{w.kind.value}] {w.message}")
    finally:
        conn.close()
    return 0


def _cmd_show(config, args) -> int:
    conn = connect(args.db)
    try:
        loop = build_loop(config, conn)
        now = local_now()
        loop.start(now)
        snapshot = loop.tick(now)
    finally:
        conn.close()

    if snapshot is None:
        print("No forecast data for the current hour")
        return 1
    print(format_snapshot_json(snapshot) if args.json else format_snapshot_text(snapshot))
    return 0


def _cmd_play(config, args) -> int:
    from wxsim.daemon import PlaybackDaemon

    PlaybackDaemon(config, db_path=args.db, interval=args.interval).start()
    return 0


def _cmd_history(args) -> int:
    conn = connect(args.db)
    try:
        run_migrations(conn)
        runs = generation_repo.get_recent_generations(conn, args.limit)
    finally:
        conn.close()

    if not runs:
        print("No forecasts generated yet")
        return 0
    for r in runs:
        print(
            f"v{r['version']:<4} {r['created_at']}  {r['reason']:<9} "
            f"{r['forecast_date']}  {r['front']:<4} "
            f"{r['min_temp']}..{r['max_temp']}°C  {r['warning_count']} warnings"
        )
    return 0


def _cmd_serve(config, args) -> int:
    import uvicorn

    from wxsim.dashboard import create_app

    uvicorn.run(create_app(config, args.db), host=args.host, port=args.port)
    return 0


def _cmd_config(config, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "set":
        kv = args.keyvalue
        if "=" not in kv:
            print("Error: use key=value format")
            return 1
        key, value = kv.split("=", 1)
        try:
            new_config = set_config_value(config, key.strip(), value.strip())
        except (KeyError, ValueError, ValidationError) as e:
            print(f"Error: {e}")
            return 1
        print(f"Set {key} = {get_config_value(new_config, key.strip())}")
        if args.write:
            save_config(new_config, args.config)
            print(f"Saved {args.config}")
        return 0
    else:
        print("Use: config show | config set key=value")
        return 1
