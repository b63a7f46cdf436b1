from __future__ import annotations

import argparse
import importlib.metadata
import traceback


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="mention-console",
        description="Mention composer: render and replay @mention compositions",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=importlib.metadata.version("mention-console"),
    )

    sub = parser.add_subparsers(dest="command", required=True)

    from mention_console.composer_cli import register_subcommands

    register_subcommands(sub)

    args = parser.parse_args(argv)

    from mention_console.composer_cli import run_command

    try:
        return run_command(args)
    except Exception as exc:  # noqa: BLE001
        if getattr(args, "debug", False):
            print(f"[debug] error: {exc}")
            traceback.print_exc()
        else:
            print(f"error: {exc}")
        return 1
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
