# SPDX-License-Identifier: Apache-2.0
"""Shared CLI plumbing: verbosity flags, logging setup and shell-style tracing."""

from __future__ import annotations

import argparse
import logging
import os
import sys

VERBOSITY_ENV = "TREATYGLOBE_VERBOSITY"
TRACE_ENV = "TREATYGLOBE_SHELL_TRACE"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "quiet": logging.ERROR,
}


def add_verbosity_options(parser: argparse.ArgumentParser) -> None:
    """Attach ``--verbose``/``--quiet``/``--trace`` to ``parser``."""

    parser.add_argument(
        "--verbose", action="store_true", help="Verbose logging for this command"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Quiet logging for this command"
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Shell-style trace of key steps and external requests",
    )


def apply_verbosity(ns: argparse.Namespace) -> None:
    """Translate parsed verbosity flags into environment variables and configure logging."""

    if getattr(ns, "verbose", False):
        os.environ[VERBOSITY_ENV] = "debug"
    elif getattr(ns, "quiet", False):
        os.environ[VERBOSITY_ENV] = "quiet"
    if getattr(ns, "trace", False):
        os.environ[TRACE_ENV] = "1"
    configure_logging_from_env()


def configure_logging_from_env(default: str = "info") -> int:
    """Configure the root logger from ``TREATYGLOBE_VERBOSITY``.

    Returns the numeric level that was applied. Repeated calls reset the
    level without stacking handlers.
    """

    name = (os.environ.get(VERBOSITY_ENV) or default).strip().lower()
    level = _LEVELS.get(name, _LEVELS[default])
    fmt = "%(levelname)s %(name)s: %(message)s" if level == logging.DEBUG else "%(message)s"
    logging.basicConfig(level=level, format=fmt, stream=sys.stderr, force=True)
    return level


def trace_enabled() -> bool:
    return os.environ.get(TRACE_ENV, "").strip().lower() in {"1", "true", "yes"}


def trace(message: str) -> None:
    """Emit a ``+ message`` line on stderr when shell tracing is enabled."""

    if trace_enabled():
        print(f"+ {message}", file=sys.stderr)
