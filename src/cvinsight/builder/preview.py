"""Debounced live preview and on-demand export of the resume being edited.

Store writes restart a debounce timer; once edits settle the pipeline
renders the stable snapshot and compiles it off the event loop.  The
previous preview PDF stays available until its replacement is ready.
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import contextlib
import logging
import shutil
from collections.abc import Callable
from functools import partial
from pathlib import Path
from typing import TYPE_CHECKING

from cvinsight.builder.artifacts import (
    Materializer,
    PdfArtifact,
    download_filename,
    materialize_pdf,
)
from cvinsight.config import get_settings
from cvinsight.templates import render

if TYPE_CHECKING:
    from cvinsight.builder.models import ResumeSnapshot
    from cvinsight.builder.store import ResumeStore

logger = logging.getLogger(__name__)

__all__ = [
    "EXPORT_ERROR_MESSAGE",
    "PREVIEW_ERROR_MESSAGE",
    "Debouncer",
    "PreviewPipeline",
]

PREVIEW_ERROR_MESSAGE = "Could not load preview."
EXPORT_ERROR_MESSAGE = "Failed to download PDF. Please try again."


class Debouncer:
    """Run *callback* once input has been quiet for *delay* seconds.

    Every :meth:`trigger` cancels the pending call and schedules a new
    one on the running loop, so only the last of a burst fires.
    """

    def __init__(self, delay: float, callback: Callable[[], None]) -> None:
        self.delay = delay
        self._callback = callback
        self._handle: asyncio.TimerHandle | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def trigger(self) -> None:
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        self._callback()


def _release_result(future: concurrent.futures.Future[PdfArtifact]) -> None:
    # Runs in the worker thread once a compile nobody awaits any more ends.
    if not future.cancelled() and future.exception() is None:
        future.result().release()


class PreviewPipeline:
    """Keep a compiled preview of *store* in step with its debounced contents.

    Attributes:
        stable_snapshot: Last snapshot that survived the debounce interval.
        stable_updates: Number of debounced changes observed since start.
        artifact: Current preview PDF, or *None* before the first render.
        loading: True while a render is in flight.
        error: User-facing message for the last failed preview, if any.
        export_error: User-facing message for the last failed download.
    """

    def __init__(
        self,
        store: ResumeStore,
        *,
        delay: float | None = None,
        compiler: str | None = None,
        materializer: Materializer | None = None,
    ) -> None:
        settings = get_settings()
        self.store = store
        self.delay = settings.preview_debounce if delay is None else delay
        self._materializer: Materializer = materializer or partial(
            materialize_pdf, compiler=compiler or settings.latex_compiler
        )
        self._debouncer = Debouncer(self.delay, self._on_stable)
        self._unsubscribe: Callable[[], None] | None = None
        self._tasks: set[asyncio.Task[None]] = set()
        self._executor: concurrent.futures.ThreadPoolExecutor | None = None
        self._generation = 0

        self.stable_snapshot: ResumeSnapshot | None = None
        self.stable_updates = 0
        self.artifact: PdfArtifact | None = None
        self.loading = False
        self.error: str | None = None
        self.export_error: str | None = None

    # ------------------------------------------------------------------
    # lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Subscribe to the store and render its initial contents."""
        if self._unsubscribe is not None:
            return
        self._unsubscribe = self.store.subscribe(lambda _store: self._debouncer.trigger())
        self.stable_snapshot = self.store.snapshot()
        self._schedule_render(self.stable_snapshot)

    async def aclose(self) -> None:
        """Stop listening, cancel timers and renders, release the preview."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._debouncer.cancel()

        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        for task in tasks:
            with contextlib.suppress(asyncio.CancelledError):
                await task

        if self.artifact is not None:
            self.artifact.release()
            self.artifact = None
        self.loading = False
        if self._executor is not None:
            self._executor.shutdown(wait=False)
            self._executor = None

    async def wait_idle(self) -> None:
        """Wait until every scheduled render has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    # ------------------------------------------------------------------
    # rendering
    # ------------------------------------------------------------------

    def _on_stable(self) -> None:
        snapshot = self.store.snapshot()
        if snapshot == self.stable_snapshot:
            return
        self.stable_snapshot = snapshot
        self.stable_updates += 1
        self._schedule_render(snapshot)

    def _schedule_render(self, snapshot: ResumeSnapshot) -> None:
        self._generation += 1
        task = asyncio.get_running_loop().create_task(self._render(snapshot, self._generation))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _compile(self, snapshot: ResumeSnapshot, stem: str) -> PdfArtifact:
        return self._materializer(render(snapshot), stem)

    async def _compile_off_loop(self, snapshot: ResumeSnapshot, stem: str) -> PdfArtifact:
        """Compile in a worker thread; a cancelled caller never leaks the PDF.

        Cancelling the awaiting task cannot stop a compile that has already
        started, so its artifact is released as soon as the worker returns.
        """
        if self._executor is None:
            self._executor = concurrent.futures.ThreadPoolExecutor(thread_name_prefix="cvinsight-render")
        future = self._executor.submit(self._compile, snapshot, stem)
        try:
            return await asyncio.wrap_future(future)
        except asyncio.CancelledError:
            future.add_done_callback(_release_result)
            raise

    async def _render(self, snapshot: ResumeSnapshot, generation: int) -> None:
        self.loading = True
        try:
            artifact = await self._compile_off_loop(snapshot, "preview")
        except Exception:
            logger.exception("Preview render failed")
            if generation == self._generation:
                self.error = PREVIEW_ERROR_MESSAGE
                self.loading = False
            return

        if generation != self._generation:
            logger.debug("Discarding stale preview render %d", generation)
            artifact.release()
            return

        previous, self.artifact = self.artifact, artifact
        self.error = None
        self.loading = False
        if previous is not None:
            previous.release()

    # ------------------------------------------------------------------
    # export
    # ------------------------------------------------------------------

    async def download(self, destination_dir: str | Path) -> Path | None:
        """Render the current store contents and save them as a PDF.

        The debounce interval is bypassed so the file always reflects the
        latest edits.  Returns the written path, or *None* after a failure,
        in which case :attr:`export_error` holds the message to show.
        """
        self.export_error = None
        snapshot = self.store.snapshot()
        artifact: PdfArtifact | None = None
        try:
            artifact = await self._compile_off_loop(snapshot, "resume")
            target = Path(destination_dir) / download_filename(snapshot.about.name)
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(artifact.path, target)
        except Exception:
            logger.exception("Resume download failed")
            self.export_error = EXPORT_ERROR_MESSAGE
            return None
        finally:
            if artifact is not None:
                artifact.release()

        logger.info("Saved resume to %s", target)
        return target
