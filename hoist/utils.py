"""
CLI Utilities

Core utility functions for Hoist CLI.
"""

from pathlib import Path
from typing import Any, Callable, NamedTuple, Optional, Sequence


class NormalizedArgs(NamedTuple):
    """Fixed-arity view over a variable-length command invocation."""

    primary: Any
    secondary: Any
    callback: Optional[Callable[..., Any]]


def normalize_args(args: Sequence[Any]) -> NormalizedArgs:
    """
    Normalize positional arguments into ``(primary, secondary, callback)``.

    The last element is the continuation when it is callable; everything
    before it is positional. Missing or falsy positionals become None and
    extra positionals are dropped. Argument types are not checked.

    Args:
        args: Raw positional arguments

    Returns:
        NormalizedArgs triple
    """
    values = list(args)
    callback = None
    if values and callable(values[-1]):
        callback = values.pop()

    positionals = [value or None for value in values[:2]]
    positionals += [None] * (2 - len(positionals))

    return NormalizedArgs(positionals[0], positionals[1], callback)


def get_working_dir() -> Path:
    """Directory project metadata is read from."""
    return Path.cwd()
