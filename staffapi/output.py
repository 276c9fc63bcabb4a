from __future__ import annotations


def emit(stdout, message: str) -> None:
    """Write one progress line to a management command stream or any text file object."""

    if stdout is None:
        return
    stdout.write(message if message.endswith("\n") else f"{message}\n")
