"""Shared CLI utilities — Rich console, error handling, plate helpers."""

from __future__ import annotations

import functools
import traceback
from pathlib import Path
from typing import Any, Callable

from rich.console import Console

from labstuff.core import Plate, StoreError, retrieve

console = Console()

# Set by the --verbose flag on the top-level CLI group.
verbose: bool = False


def open_plate(path: str) -> Plate:
    """Load a stored plate with CLI-friendly error handling.

    Args:
        path: Path to a file written by ``labstuff create``.

    Returns:
        The stored Plate.

    Raises:
        SystemExit: With code 1 if the file doesn't hold a plate.
    """
    try:
        obj = retrieve(Path(path))
    except StoreError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)
    if not isinstance(obj, Plate):
        console.print(f"[red]Error:[/red] Not a plate: {path} holds a {type(obj).__name__}")
        raise SystemExit(1)
    return obj


def describe(items: list[Any]) -> str:
    """Comma-separated display names of well contents."""
    names = []
    for item in items:
        get = getattr(item, "get", None)
        if callable(get):
            names.append(str(get("name") or get("description") or get("id") or "?"))
        else:
            names.append(str(item))
    return ", ".join(names)


def error_handler(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator wrapping CLI commands with standard error handling.

    Catches LabstuffError (exit 1) and unexpected exceptions (exit 2).
    With --verbose, unexpected errors include the full traceback.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        from labstuff.core.exceptions import LabstuffError

        try:
            return func(*args, **kwargs)
        except SystemExit:
            raise
        except LabstuffError as e:
            console.print(f"[red]Error:[/red] {e}")
            raise SystemExit(1)
        except Exception as e:
            if verbose:
                console.print(f"[red]Internal error:[/red] {e}")
                console.print(traceback.format_exc())
            else:
                console.print(
                    f"[red]Internal error:[/red] {type(e).__name__}: {e}\n"
                    "[dim]Use --verbose for the full traceback.[/dim]"
                )
            raise SystemExit(2)

    return wrapper
