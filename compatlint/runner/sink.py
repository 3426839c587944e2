"""Diagnostic sinks handed to each pipeline run.

Checks never print. The pipeline renders their failures and writes them to
the sink it was given:

- GatedSink (live pass): the first write for a file first fires a callback
  that stops the progress spinner and prints the failure header, then
  forwards. Every later write is forwarded directly.
- DirectSink (replay pass, global checks): always forwards.

A sink lives for exactly one file, so there is no shared channel to restore.
"""

from __future__ import annotations

import sys
from typing import Callable, Protocol, TextIO


class DiagnosticSink(Protocol):
    def write(self, text: str) -> None: ...


class DirectSink:
    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self.writes = 0

    @property
    def stream(self) -> TextIO:
        # Resolved per write: the spinner may have swapped sys.stderr while it ran.
        return self._stream if self._stream is not None else sys.stderr

    def write(self, text: str) -> None:
        self.writes += 1
        print(text, file=self.stream)


class GatedSink(DirectSink):
    def __init__(self, on_first_write: Callable[[], None], stream: TextIO | None = None) -> None:
        super().__init__(stream)
        self._on_first_write = on_first_write
        self._armed = True

    @property
    def fired(self) -> bool:
        return not self._armed

    def write(self, text: str) -> None:
        if self._armed:
            self._armed = False
            self._on_first_write()
        super().write(text)
