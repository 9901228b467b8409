from __future__ import annotations

import logging

import pytest

from addrlist.__main__ import build_parser, run_kwargs, stdlib_log_level
from addrlist.core.addresses import random_address


def test_cli_arguments_become_run_kwargs() -> None:
    a, b, me = random_address(), random_address(), random_address()

    args = build_parser().parse_args(
        ["--host", "0.0.0.0", "--port", "9001", "--initial", a, b, "--self-address", me, "--log-level", "DEBUG"]
    )

    assert run_kwargs(args) == {
        "host": "0.0.0.0",
        "port": 9001,
        "initial": [a, b],
        "self_address": me,
        "log_level": "debug",
    }


def test_cli_defaults() -> None:
    args = build_parser().parse_args([])
    kwargs = run_kwargs(args)

    assert kwargs["host"] == "127.0.0.1"
    assert kwargs["port"] == 8000
    assert kwargs["initial"] is None
    assert kwargs["self_address"] is None


def test_cli_log_level_defaults_from_environment(monkeypatch) -> None:
    monkeypatch.setenv("ADDRLIST_LOG_LEVEL", "WARNING")

    args = build_parser().parse_args([])

    assert args.log_level == "warning"


def test_cli_rejects_unknown_log_level() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--log-level", "verbose"])


def test_trace_level_maps_to_stdlib_debug() -> None:
    args = build_parser().parse_args(["--log-level", "trace"])

    assert args.log_level == "trace"
    assert stdlib_log_level(args.log_level) == logging.DEBUG
    assert stdlib_log_level("warning") == logging.WARNING
    assert stdlib_log_level("critical") == logging.CRITICAL
