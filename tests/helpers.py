"""Assertion helpers for Result outcomes."""

from __future__ import annotations

from kungfu import Error, Ok


def ok_value(outcome):
    match outcome:
        case Ok(value):
            return value
        case Error(err):
            raise AssertionError(f"expected Ok, got Error({err!r})")


def error_value(outcome) -> Exception:
    match outcome:
        case Error(err):
            return err
        case Ok(value):
            raise AssertionError(f"expected Error, got Ok({value!r})")


class Boom(Exception):
    """Failure used across tests."""
