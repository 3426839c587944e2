from __future__ import annotations

import enum

from rich.console import Console
from rich.markup import escape
from rich.status import Status


class ProgressState(enum.Enum):
    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


TERMINAL_STATES = frozenset({ProgressState.SUCCEEDED, ProgressState.FAILED})


class ProgressHandle:
    """Progress line for one file: pending -> running -> succeeded | failed.

    Terminal states are final; a second succeed()/fail() is a no-op. When not
    interactive no spinner is started, but the final line is printed the same.
    """

    def __init__(self, text: str, *, out: Console, err: Console, interactive: bool) -> None:
        self.text = text
        self.state = ProgressState.PENDING
        self.console = out
        self._err = err
        self._interactive = interactive
        self._status: Status | None = None

    @property
    def animated(self) -> bool:
        return self._status is not None

    def start(self) -> None:
        if self.state is not ProgressState.PENDING:
            return
        self.state = ProgressState.RUNNING
        if self._interactive:
            # CI logs cannot overwrite earlier lines, which is how the spinner animates.
            self._status = self.console.status(escape(self.text), spinner="dots")
            self._status.start()

    def _stop_animation(self) -> None:
        if self._status is not None:
            self._status.stop()
            self._status = None

    def succeed(self) -> None:
        if self.state in TERMINAL_STATES:
            return
        self._stop_animation()
        self.state = ProgressState.SUCCEEDED
        self.console.print(f"[green]✔[/green] {escape(self.text)}")

    def fail(self) -> None:
        if self.state in TERMINAL_STATES:
            return
        self._stop_animation()
        self.console = self._err
        self.state = ProgressState.FAILED
        self.console.print(f"[bold red]✖ {escape(self.text)}[/bold red]")


class ProgressReporter:
    def __init__(self, *, interactive: bool, out: Console | None = None, err: Console | None = None) -> None:
        self.interactive = interactive
        self.out = out if out is not None else Console(highlight=False, soft_wrap=True)
        self.err = err if err is not None else Console(stderr=True, highlight=False, soft_wrap=True)

    def handle(self, text: str) -> ProgressHandle:
        return ProgressHandle(text, out=self.out, err=self.err, interactive=self.interactive)
