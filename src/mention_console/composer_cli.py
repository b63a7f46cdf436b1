from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any

from mention_console.composer.config import load_composer_config
from mention_console.composer.db import open_db
from mention_console.composer.directory import UserDirectory, load_directory
from mention_console.composer.logging_setup import configure_logging, export_logs
from mention_console.composer.mention_keys import build_mention_keys
from mention_console.composer.session import CompositionSession, compose_state
from mention_console.composer.settings import ComposerSettings
from mention_console.composer.settings_store import SettingsStore
from mention_console.core.enums import CompositionEvent, MatchMode, NamingPolicy
from mention_console.core.models import CompositionState, MentionKey, SuggestionItem

logger = logging.getLogger(__name__)


def register_subcommands(sub: argparse._SubParsersAction) -> None:
    def add_global_args(p: argparse.ArgumentParser) -> None:
        p.add_argument(
            "--debug",
            dest="debug",
            action="store_true",
            help="Enable verbose debug logs",
        )
        p.add_argument("--db", default=None, help="Settings database (default: XDG state dir)")

    def add_directory_args(p: argparse.ArgumentParser) -> None:
        source = p.add_mutually_exclusive_group(required=True)
        source.add_argument("--users", help="JSON file with a list of user objects")
        source.add_argument("--mock", action="store_true", help="Use the built-in sample users")
        p.add_argument(
            "--policy",
            choices=[policy.value for policy in NamingPolicy],
            default=None,
            help="Naming policy (default: stored setting)",
        )

    render = sub.add_parser("render", help="Show raw/tagged/display/spans for a raw message")
    add_global_args(render)
    add_directory_args(render)
    render.add_argument(
        "--markup",
        action="store_true",
        help="Also print the highlight overlay as Pango markup",
    )
    render.add_argument("text", help="Raw message text")

    replay = sub.add_parser("replay", help="Run a JSON event script through a composition session")
    add_global_args(replay)
    add_directory_args(replay)
    replay.add_argument(
        "--match-mode",
        choices=[mode.value for mode in MatchMode],
        default=None,
        help="Display-name matching (default: stored setting)",
    )
    replay.add_argument("--context", default="default", help="Initial context id")
    replay.add_argument("script", help="JSON file with a list of events")

    keys = sub.add_parser("keys", help="List @mention keys including full-name keys")
    add_global_args(keys)
    add_directory_args(keys)
    keys.add_argument("--key", action="append", default=[], help="Extra base key (repeatable)")

    config = sub.add_parser("config", help="Show or change stored settings")
    add_global_args(config)
    config.add_argument("--policy", choices=[policy.value for policy in NamingPolicy], default=None)
    config.add_argument("--match-mode", choices=[mode.value for mode in MatchMode], default=None)
    config.add_argument("--highlight-color", default=None)
    config.add_argument("--log-level", default=None)

    export = sub.add_parser("export-logs", help="Export application logs for bug reports")
    export.add_argument(
        "-o",
        "--output",
        default=None,
        help="Write logs to file (default: stdout)",
    )


def _load_settings(db: str | None) -> ComposerSettings:
    conn = open_db(db)
    try:
        stored = SettingsStore(conn).load()
    finally:
        conn.close()
    return load_composer_config(stored)


def _directory_from_args(args: argparse.Namespace) -> UserDirectory:
    if args.mock:
        from mention_console.mock import create_mock_directory

        return create_mock_directory()
    return load_directory(args.users)


def state_to_dict(state: CompositionState) -> dict[str, Any]:
    return {
        "raw": state.raw,
        "tagged": state.tagged,
        "display": state.display,
        "spans": [asdict(span) for span in state.spans],
    }


def run_replay(
    session: CompositionSession,
    events: list[dict[str, Any]],
    directory: UserDirectory,
    policy: NamingPolicy,
) -> list[dict[str, Any]]:
    """Apply *events* to *session* and return one result record per event.

    Raises ValueError for an event with an unknown type.
    """
    results: list[dict[str, Any]] = []
    for position, event in enumerate(events):
        event_type = event.get("type")
        record: dict[str, Any] = {"event": event_type}
        if event_type == CompositionEvent.TEXT_EDITED:
            session.text_edited(str(event.get("text", "")), directory, policy)
        elif event_type == CompositionEvent.SUGGESTION_SELECTED:
            item = SuggestionItem(
                username=str(event.get("username", "")),
                is_group=bool(event.get("is_group", False)),
            )
            record["cursor"] = session.suggestion_selected(
                item, str(event.get("text", "")), directory, policy
            )
        elif event_type == CompositionEvent.CONTEXT_CHANGED:
            record["changed"] = session.context_changed(str(event.get("context_id", "")))
        elif event_type == "external_value":
            applied = session.sync_external_value(str(event.get("value", "")), directory, policy)
            record["applied"] = None if applied is None else str(applied)
        else:
            raise ValueError(f"event {position}: unknown type {event_type!r}")
        record["context_id"] = session.context_id
        record.update(state_to_dict(session.state))
        results.append(record)
    return results


def _run_render(args: argparse.Namespace, settings: ComposerSettings) -> int:
    directory = _directory_from_args(args)
    policy = NamingPolicy(args.policy) if args.policy else settings.naming_policy
    state = compose_state(args.text, directory, policy)
    result = state_to_dict(state)
    if args.markup:
        from mention_console.ui_gtk.widgets.mention import render_highlight_markup

        result["markup"] = render_highlight_markup(
            state.display, state.spans, settings.highlight_color
        )
    print(json.dumps(result, ensure_ascii=False))
    return 0


def _run_replay(args: argparse.Namespace, settings: ComposerSettings) -> int:
    directory = _directory_from_args(args)
    policy = NamingPolicy(args.policy) if args.policy else settings.naming_policy
    mode = MatchMode(args.match_mode) if args.match_mode else settings.match_mode
    events = json.loads(Path(args.script).read_text(encoding="utf-8"))
    if not isinstance(events, list):
        raise ValueError(f"{args.script}: expected a list of events")
    session = CompositionSession(args.context, match_mode=mode)
    for record in run_replay(session, events, directory, policy):
        print(json.dumps(record, ensure_ascii=False))
    return 0


def _run_keys(args: argparse.Namespace, settings: ComposerSettings) -> int:
    directory = _directory_from_args(args)
    policy = NamingPolicy(args.policy) if args.policy else settings.naming_policy
    base = [MentionKey(key=key, case_sensitive=True) for key in args.key]
    for key in build_mention_keys(base, directory, policy):
        print(json.dumps(asdict(key), ensure_ascii=False))
    return 0


def _run_config(args: argparse.Namespace) -> int:
    conn = open_db(args.db)
    try:
        store = SettingsStore(conn)
        settings = store.load()
        changed = False
        if args.policy:
            settings.naming_policy = NamingPolicy(args.policy)
            changed = True
        if args.match_mode:
            settings.match_mode = MatchMode(args.match_mode)
            changed = True
        if args.highlight_color:
            settings.highlight_color = args.highlight_color
            changed = True
        if args.log_level:
            settings.log_level = args.log_level.upper()
            changed = True
        if changed:
            store.save(settings)
            logger.info("Settings saved")
    finally:
        conn.close()
    print(json.dumps(asdict(settings)))
    return 0


def _export_logs(output: str | None) -> int:
    written = export_logs(output)
    if written is not None:
        logger.info("Logs exported to %s", written)
    return 0


def run_command(args: argparse.Namespace) -> int:
    if args.command == "export-logs":
        return _export_logs(args.output)

    if args.command == "config":
        configure_logging("WARNING", debug=args.debug)
        return _run_config(args)

    settings = _load_settings(args.db)
    configure_logging(settings.log_level, debug=args.debug)
    logger.debug("command=%s policy=%s", args.command, settings.naming_policy)

    if args.command == "render":
        return _run_render(args, settings)
    if args.command == "replay":
        return _run_replay(args, settings)
    if args.command == "keys":
        return _run_keys(args, settings)
    raise RuntimeError(f"Unsupported command: {args.command}")
