"""Shell command formatting utilities."""

import shlex
from collections.abc import Sequence


def quote_arg(arg: str) -> str:
    """Safely quote a shell argument.

    Args:
        arg: Argument to quote

    Returns:
        Shell-safe quoted argument
    """
    return shlex.quote(arg)


def format_command(argv: Sequence[str]) -> str:
    """Render argv as the command line a user could paste into a shell.

    Args:
        argv: Program and arguments

    Returns:
        Space-joined command, quoting only where needed
    """
    return " ".join(quote_arg(arg) for arg in argv)
