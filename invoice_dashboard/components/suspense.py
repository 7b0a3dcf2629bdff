"""Suspense boundary: show a placeholder until a region's data is ready.

A region is an ``AsyncContent`` widget that fetches its own data in a worker
once mounted. The ``Suspense`` container around it mounts the region hidden
next to a fallback widget, and swaps the two when the region reports ready.
Boundaries know nothing about each other, so sibling regions resolve in
whatever order their data arrives.
"""

import logging
import time
from collections.abc import Callable

from textual.app import ComposeResult
from textual.containers import Container
from textual.message import Message
from textual.widget import Widget

logger = logging.getLogger(__name__)

FALLBACK_CLASS = "suspense-fallback"


class AsyncContent(Widget):
    """Widget that loads and renders its own data after mounting.

    Subclasses implement ``load_data``. Failures of the underlying fetch are
    the subclass's business: it should render an error state and return
    normally so the boundary still resolves.
    """

    class Ready(Message):
        """Posted when the content has finished loading."""

        def __init__(self, content: "AsyncContent", generation: int) -> None:
            super().__init__()
            self.content = content
            self.generation = generation

    def __init__(self, *, id: str | None = None, classes: str | None = None) -> None:
        super().__init__(id=id, classes=classes)
        self.loaded = False
        self.generation = 0

    def on_mount(self) -> None:
        self.reload()

    def reload(self) -> None:
        """Start (or restart) loading in a worker."""
        self.loaded = False
        self.generation += 1
        self.run_worker(self._resolve(self.generation), exclusive=True, group="load-data")

    async def _resolve(self, generation: int) -> None:
        started = time.monotonic()
        await self.load_data()
        self.loaded = True
        logger.debug(f"{type(self).__name__} loaded in {time.monotonic() - started:.2f}s")
        self.post_message(self.Ready(self, generation))

    async def load_data(self) -> None:
        """Fetch data and render it into this widget."""
        raise NotImplementedError


class Suspense(Container):
    """Container that shows ``fallback`` until ``body`` has loaded."""

    DEFAULT_CSS = """
    Suspense {
        height: auto;
    }
    """

    class Resolved(Message):
        """Posted when the boundary swaps its fallback for real content."""

        def __init__(self, boundary: "Suspense") -> None:
            super().__init__()
            self.boundary = boundary

    def __init__(
        self,
        body: AsyncContent,
        fallback: Callable[[], Widget],
        *,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(id=id, classes=classes)
        self.body = body
        self._make_fallback = fallback
        self.resolved = False

    def _new_fallback(self) -> Widget:
        widget = self._make_fallback()
        widget.add_class(FALLBACK_CLASS)
        return widget

    def compose(self) -> ComposeResult:
        self.body.display = False
        yield self._new_fallback()
        yield self.body

    @property
    def showing_fallback(self) -> bool:
        """Whether the placeholder is currently in the tree."""
        return len(self.query(f".{FALLBACK_CLASS}")) > 0

    async def on_async_content_ready(self, event: AsyncContent.Ready) -> None:
        """Swap the fallback for the loaded body."""
        event.stop()
        if event.content is not self.body:
            return
        # Ready from a load that a later reload superseded
        if event.generation != self.body.generation:
            logger.debug(f"Ignoring stale ready for {self.id} (load {event.generation})")
            return

        await self.query(f".{FALLBACK_CLASS}").remove()
        self.body.display = True
        self.resolved = True
        self.post_message(self.Resolved(self))

    async def reset(self) -> None:
        """Return to the pending state and reload the body."""
        self.resolved = False
        self.body.display = False
        if not self.showing_fallback:
            await self.mount(self._new_fallback(), before=self.body)
        self.body.reload()
