from __future__ import annotations

import argparse
import asyncio
import sys
from textwrap import dedent

__all__ = ["cli"]

# ---------------------------------------------------------------------------+
#  Minimal CLI parser                                                         +
# ---------------------------------------------------------------------------+


def _build_parser() -> argparse.ArgumentParser:  # noqa: D401 – imperative style
    """Return a parser that understands *only* ``--help`` and ``--version``.

    ``python -m wabot_core --help`` exits before settings are read or any
    plugin module is imported.
    """

    try:
        import importlib.metadata as _ilmd

        version: str = _ilmd.version("wabot")
    except Exception:  # pragma: no cover – metadata lookup best-effort
        version = "unknown"

    parser = argparse.ArgumentParser(
        prog="python -m wabot_core",
        add_help=False,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=dedent(
            """\
            Chat-bot bootstrap
            ------------------
            Run *without arguments* to start the bot using environment
            variables (OWNER_NUMBER, DEV_NUMBERS, DATA_DIR, ...) and the
            code-base defaults. Messages are read from stdin as
            "<sender> <text>" lines.
            """
        ),
    )

    parser.add_argument("-h", "--help", action="help", help="show this message and exit")
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {version}")
    return parser


# ---------------------------------------------------------------------------+
#  Public entry-point                                                        +
# ---------------------------------------------------------------------------+


def cli(argv: list[str] | None = None) -> None:  # noqa: D401
    """Entry-point for ``python -m wabot_core`` and the ``wabot`` script."""

    # Handle trivial flags before heavy imports.
    _build_parser().parse_known_args(argv)  # exits on -h/-V automatically

    from wabot_core.logger_setup import setup_logging

    setup_logging()
    from wabot_core.main import main  # delayed import keeps --help fast

    sys.exit(asyncio.run(main()))


# ---------------------------------------------------------------------------+
#  Module runner                                                             +
# ---------------------------------------------------------------------------+

if __name__ == "__main__":  # pragma: no cover
    try:
        cli(sys.argv[1:])
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(130)
