"""Command-line entry point: ``blob FILE``."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from blob_editor.commands import default_table
from blob_editor.config import EditorConfig
from blob_editor.errors import EditorFatalError
from blob_editor.runtime import telemetry
from blob_editor.runtime.cancellation import CancellationToken, interrupt_cancels
from blob_editor.session import EXIT_FAILURE, EditorSession


def _parse_args(
    argv: Optional[Sequence[str]], config: EditorConfig
) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="blob",
        description="A line-oriented text editor.",
        epilog=default_table().help_text().decode("utf-8"),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("file", help="File to edit; created if it does not exist")
    parser.add_argument(
        "--prompt",
        default=None,
        help=f"Prompt shown before each command line (default: {config.prompt!r})",
    )
    parser.add_argument(
        "--tui",
        action="store_true",
        help="Run inside the Textual front-end instead of the plain terminal",
    )
    parser.add_argument(
        "--log-preset",
        choices=telemetry.PRESETS,
        default=None,
        help="Telemetry preset (default: environment driven)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    config = EditorConfig.from_env()
    args = _parse_args(argv, config)
    config = config.with_overrides(prompt=args.prompt, log_preset=args.log_preset)
    if config.log_preset:
        telemetry.configure(preset=config.log_preset)

    if args.tui:
        from blob_editor.adapters.textual.app import run_app

        return run_app(args.file, config=config)

    token = CancellationToken()
    session = EditorSession(args.file, config=config, cancellation=token)
    try:
        with interrupt_cancels(token):
            return session.run()
    except EditorFatalError as exc:
        telemetry.record_event("session.fatal", level="error", data={"error": exc})
        sys.stdout.flush()
        print(f"blob: {exc}", file=sys.stderr)
        return EXIT_FAILURE


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":  # pragma: no cover - manual entry point
    run()
