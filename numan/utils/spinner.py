# file: numan/utils/spinner.py
# Arrow progress indicator shown while an upload is in flight

import asyncio
import sys
from typing import Optional, TextIO

ARROWS = "---->---->---->"


def rotate(frame: str) -> str:
    """Move the last character to the front, which shifts the arrows right."""
    if not frame:
        return frame
    return frame[-1] + frame[:-1]


class Spinner:
    """
    Async context manager rendering ``<label> [---->---->---->] <suffix>``.

    The arrows advance every ``delay`` seconds until the block exits. The
    render task waits on a completion event, so leaving the block stops the
    animation immediately. Outside a terminal a single static line is
    written instead of the animation.

    Usage::

        async with Spinner("pkg.1.0.0.nupkg", suffix=url):
            await client.put(...)
    """

    def __init__(
        self,
        label: str,
        suffix: str = "",
        delay: float = 0.1,
        stream: Optional[TextIO] = None,
        animate: Optional[bool] = None,
    ):
        self.label = label
        self.suffix = suffix
        self.delay = delay
        self.stream = stream or sys.stdout
        if animate is None:
            isatty = getattr(self.stream, "isatty", None)
            animate = bool(isatty and isatty())
        self.animate = animate
        self.frames = 0
        self._frame = ARROWS
        self._done: Optional[asyncio.Event] = None
        self._task: Optional[asyncio.Task] = None

    def _line(self) -> str:
        line = f"{self.label} [{self._frame}]"
        if self.suffix:
            line += f" {self.suffix}"
        return line

    def _write(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()

    async def _render(self) -> None:
        while not self._done.is_set():
            self._write("\r" + self._line())
            self.frames += 1
            self._frame = rotate(self._frame)
            try:
                await asyncio.wait_for(self._done.wait(), timeout=self.delay)
            except asyncio.TimeoutError:
                pass

    async def __aenter__(self) -> "Spinner":
        self._done = asyncio.Event()
        if self.animate:
            self._task = asyncio.create_task(self._render())
        else:
            self._write(self._line() + "\n")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self._done.set()
        if self._task is not None:
            await self._task
            self._task = None
            # clear the animated line
            self._write("\r" + " " * len(self._line()) + "\r")
