"""User-facing progress output for the tasks."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from rich.console import Console

console = Console(highlight=False)
error_console = Console(stderr=True, highlight=False)


def info(message: str) -> None:
    console.print(f"ℹ️  {message}", markup=False, soft_wrap=True)


def success(message: str) -> None:
    console.print(f"✅ {message}", markup=False, soft_wrap=True)


def failure(message: str) -> None:
    error_console.print(f"❌ {message}", markup=False, soft_wrap=True, style="red")


@contextmanager
def spinner(message: str) -> Iterator[None]:
    with console.status(message, spinner="dots"):
        yield
