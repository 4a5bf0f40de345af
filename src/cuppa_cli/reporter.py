"""Console reporting for the command layer."""

from contextlib import contextmanager

import click
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn


class Reporter:
    """Prefixed, colored status lines plus a spinner for long-running steps.

    Commands receive a Reporter instead of printing directly so tests can
    capture or replace the output.
    """

    def __init__(self, console: Console | None = None):
        self._console = console

    @property
    def console(self) -> Console:
        if self._console is None:
            self._console = Console(stderr=True)
        return self._console

    def success(self, message: str):
        click.echo(f"{click.style('✓', fg='green')} {message}")

    def error(self, message: str):
        click.echo(f"{click.style('✗', fg='red')} {message}", err=True)

    def warn(self, message: str):
        click.echo(f"{click.style('⚠', fg='yellow')} {message}")

    def info(self, message: str):
        click.echo(f"{click.style('ℹ', fg='blue')} {message}")

    def log(self, message: str = ""):
        click.echo(message)

    @contextmanager
    def spinner(self, message: str):
        """Show a spinner while the block runs; it is cleared when the block exits."""
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=self.console,
            transient=True,
        ) as progress:
            progress.add_task(message, total=None)
            yield
