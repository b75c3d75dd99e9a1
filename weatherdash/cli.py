"""CLI entry point for the weather lookup dashboard."""

import argparse
import asyncio
import json
import logging
import sys
from typing import TextIO

from weatherdash.config.loader import (
    get_config_value,
    load_config,
    redacted,
    save_config,
    set_config_value,
)
from weatherdash.config.schema import AppConfig
from weatherdash.ingest.openweather_client import OpenWeatherClient
from weatherdash.models.common import Units
from weatherdash.models.dispatch import DispatchOutcome, OutcomeStatus
from weatherdash.models.view import ViewState
from weatherdash.pipeline.search_coordinator import SearchCoordinator
from weatherdash.preferences.app_state import (
    AppState,
    load_app_state,
    save_app_state,
    set_preference,
)
from weatherdash.preferences.store import SqlitePreferenceStore
from weatherdash.reporting.formatters import format_view_json, format_view_text
from weatherdash.storage.database import connect, run_migrations

DEFAULT_CONFIG = "config/weatherdash.yaml"
DEFAULT_DB = "data/weatherdash.db"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="weatherdash",
        description="City weather lookup with a 5-day forecast",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )
    parser.add_argument("--db", default=DEFAULT_DB, help="SQLite preferences DB path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command")

    # search
    search_p = sub.add_parser("search", help="Look up weather for a city")
    search_p.add_argument("city", nargs="?", help="City name (default: last city)")
    search_p.add_argument("--units", choices=[u.value for u in Units])
    search_p.add_argument("--json", action="store_true", help="Print JSON")

    # watch
    watch_p = sub.add_parser(
        "watch", help="Read the search box text line by line from stdin"
    )
    watch_p.add_argument("--units", choices=[u.value for u in Units])

    # prefs show / prefs set
    prefs_p = sub.add_parser("prefs", help="Preference operations")
    prefs_sub = prefs_p.add_subparsers(dest="prefs_command")
    prefs_sub.add_parser("show", help="Display stored preferences")
    pset_p = prefs_sub.add_parser("set", help="Set a preference")
    pset_p.add_argument("keyvalue", help="key=value to set")

    # config show / config set
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    set_p = config_sub.add_parser("set", help="Set a config value")
    set_p.add_argument("keyvalue", help="key=value to set")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    if args.command == "search":
        return _cmd_search(config, args)
    elif args.command == "watch":
        return _cmd_watch(config, args)
    elif args.command == "prefs":
        return _cmd_prefs(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _open_store(args) -> SqlitePreferenceStore:
    conn = connect(args.db)
    run_migrations(conn)
    return SqlitePreferenceStore(conn)


def _client(config: AppConfig) -> OpenWeatherClient:
    return OpenWeatherClient(
        api_key=config.provider.api_key,
        base_url=config.provider.base_url,
        timeout=config.provider.timeout_seconds,
    )


def _cmd_search(config: AppConfig, args) -> int:
    store = _open_store(args)
    try:
        state = load_app_state(store, config.preferences)
        city = args.city if args.city is not None else state.last_city
        if args.units:
            state.units = Units(args.units)
        units = state.units

        view, outcome = asyncio.run(_search(config, city, units))

        if args.json:
            print(format_view_json(view, units))
        else:
            print(format_view_text(view, units, state.variant, config.provider.icon_base_url))

        if outcome.status == OutcomeStatus.SUCCEEDED:
            state.last_city = outcome.query
            save_app_state(store, state)
            return 0
        return 1
    finally:
        store.conn.close()


async def _search(
    config: AppConfig, city: str, units: Units
) -> tuple[ViewState, DispatchOutcome]:
    async with _client(config) as client:
        coordinator = SearchCoordinator(client, config.coordinator, units)
        outcome = await coordinator.dispatch(city)
        return coordinator.view, outcome


def _cmd_watch(config: AppConfig, args) -> int:
    store = _open_store(args)
    try:
        state = load_app_state(store, config.preferences)
        if args.units:
            state.units = Units(args.units)
        view = asyncio.run(_watch(config, state, sys.stdin))
        if view.query:
            state.last_city = view.query
            save_app_state(store, state)
        return 0 if view.error == "" else 1
    finally:
        store.conn.close()


async def _watch(config: AppConfig, state: AppState, stream: TextIO) -> ViewState:
    """Treat each stdin line as the current search box text."""
    loop = asyncio.get_running_loop()
    async with _client(config) as client:
        coordinator = SearchCoordinator(client, config.coordinator, state.units)

        def _render(view: ViewState) -> None:
            if not view.loading:
                print(
                    format_view_text(
                        view, coordinator.units, state.variant,
                        config.provider.icon_base_url,
                    ),
                    flush=True,
                )

        coordinator.subscribe(_render)
        while True:
            line = await loop.run_in_executor(None, stream.readline)
            if not line:
                break
            coordinator.on_query_changed(line.rstrip("\n"))
        await coordinator.drain()
        return coordinator.view


def _cmd_prefs(config: AppConfig, args) -> int:
    store = _open_store(args)
    try:
        if args.prefs_command == "show":
            state = load_app_state(store, config.preferences)
            print(f"units: {state.units.value}")
            print(f"theme: {state.theme.value}")
            print(f"variant: {state.variant.value}")
            print(f"last_city: {state.last_city}")
            return 0
        elif args.prefs_command == "set":
            kv = args.keyvalue
            if "=" not in kv:
                print("Error: use key=value format")
                return 1
            key, value = kv.split("=", 1)
            try:
                set_preference(store, key.strip(), value.strip())
            except ValueError as e:
                print(f"Error: {e}")
                return 1
            print(f"Set {key.strip()} = {value.strip()}")
            return 0
        else:
            print("Use: prefs show | prefs set key=value")
            return 1
    finally:
        store.conn.close()


def _cmd_config(config: AppConfig, args) -> int:
    if args.config_command == "show":
        print(json.dumps(redacted(config), indent=2))
        return 0
    elif args.config_command == "set":
        kv = args.keyvalue
        if "=" not in kv:
            print("Error: use key=value format")
            return 1
        key, value = kv.split("=", 1)
        try:
            new_config = set_config_value(config, key.strip(), value.strip())
        except Exception as e:
            print(f"Error: {e}")
            return 1
        save_config(new_config, args.config)
        print(f"Set {key} = {get_config_value(new_config, key.strip())}")
        return 0
    else:
        print("Use: config show | config set key=value")
        return 1
