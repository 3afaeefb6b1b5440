# SPDX-License-Identifier: Apache-2.0
import argparse
import logging

import pytest

from treatyglobe.utils import cli_helpers


@pytest.mark.parametrize(
    "value, level",
    [("debug", logging.DEBUG), ("info", logging.INFO), ("quiet", logging.ERROR), ("bogus", logging.INFO)],
)
def test_configure_logging_from_env(monkeypatch, value, level):
    monkeypatch.setenv("TREATYGLOBE_VERBOSITY", value)
    assert cli_helpers.configure_logging_from_env() == level
    assert logging.getLogger().level == level


def test_apply_verbosity_quiet_and_trace(monkeypatch, capsys):
    monkeypatch.setenv("TREATYGLOBE_VERBOSITY", "info")
    monkeypatch.setenv("TREATYGLOBE_SHELL_TRACE", "0")
    ns = argparse.Namespace(verbose=False, quiet=True, trace=True)

    cli_helpers.apply_verbosity(ns)
    cli_helpers.trace("GET https://example.org")

    assert logging.getLogger().level == logging.ERROR
    assert "+ GET https://example.org" in capsys.readouterr().err


def test_trace_is_silent_by_default(capsys):
    cli_helpers.trace("nothing")
    assert capsys.readouterr().err == ""
