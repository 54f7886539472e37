"""Image Worker Lifecycle: drives one image from resize to captioned page entry."""

import threading
import time
from concurrent.futures import Future
from typing import List

from ..coordination import PageWriter, PreviewSequencer, PromptAgent, TokenRing
from ..core import (
    AlbumConfig,
    ExternalToolError,
    ImageTask,
    PhotoAlbumError,
    RotationChoice,
    TurnCancelled,
    WorkerResult,
    get_worker_logger,
)
from ..core.protocols import ConsoleProtocol, ImageToolProtocol, OperationHandle


class ImageWorker(threading.Thread):
    """
    Worker thread for one ImageTask.

    Steps, in order:
        1. start thumbnail and medium resizes
        2. wait for the page token, append the linked thumbnail
        3. wait for the thumbnail resize, wait for the preview turn
        4. preview, ask rotation, rotate both files if requested
        5. ask caption, append it
        6. hand the token and the preview turn to the next image

    Tool failures and prompt read failures are logged and the worker carries
    on. A page append failure ends the worker and cancels the turns of every
    later image.
    """

    def __init__(
        self,
        task: ImageTask,
        tool: ImageToolProtocol,
        ring: TokenRing,
        previews: PreviewSequencer,
        page: PageWriter,
        console: ConsoleProtocol,
        config: AlbumConfig,
    ):
        super().__init__(name=f"image-worker-{task.index}", daemon=True)
        self.task = task
        self.tool = tool
        self.ring = ring
        self.previews = previews
        self.page = page
        self.console = console
        self.config = config
        self.result = WorkerResult(index=task.index, source_path=task.source_path)
        self._pending: List[OperationHandle] = []
        self._logger = get_worker_logger(task.index)

    def run(self) -> None:
        self.result = self.process()

    def process(self) -> WorkerResult:
        task = self.task
        index = task.index
        result = WorkerResult(index=index, source_path=task.source_path)
        start_time = time.time()
        self._logger.debug(f"Begin processing {task.source_path}")

        try:
            thumbnail = self._start(
                self.tool.resize(task.source_path, task.thumbnail_path, self.config.thumbnail_percent)
            )
            medium = self._start(
                self.tool.resize(task.source_path, task.medium_path, self.config.medium_percent)
            )

            self.ring.wait_turn(index)
            self._append(self.page.append_entry(index, task.thumbnail_name, task.medium_name))

            self._logger.debug("Waiting for thumbnail resize")
            self._wait(thumbnail, result)

            self.previews.wait_turn(index)
            self.console.show(f"=============== {task.source_path} ===============")
            self.console.show("Please close the image to continue!")
            self._wait(self._start(self.tool.preview(task.thumbnail_path)), result)

            agent = PromptAgent(index, self.console, answer_limit=self.config.answer_limit).start()
            result.rotation = agent.ask_rotation()
            if result.rotation is not RotationChoice.NONE:
                # the medium file has to exist before it can be turned
                self._wait(medium, result)
                self._logger.debug(f"Rotating {result.rotation.value}")
                self._start(self.tool.rotate(task.thumbnail_path, task.thumbnail_path, result.rotation))
                self._start(self.tool.rotate(task.medium_path, task.medium_path, result.rotation))

            result.caption = agent.ask_caption()
            agent.join()
            self._append(self.page.append_caption(index, result.caption))

            self.ring.pass_turn(index)
            self.previews.done(index)
            self.console.show("")

            self._wait_pending(result)
            result.success = True

        except TurnCancelled as e:
            self._logger.warning(f"Skipping {task.source_path}: {e}")
            result.error = str(e)
            self._abort(str(e))
        except PhotoAlbumError as e:
            self._logger.error(f"Failed processing {task.source_path}: {e}")
            result.error = str(e)
            self._abort(f"image {index} failed: {e}")
        except Exception as e:
            self._logger.error(f"Unexpected error processing {task.source_path}: {e}", exc_info=True)
            result.error = str(e)
            self._abort(f"image {index} failed: {e}")
        finally:
            self._wait_pending(result)
            result.processing_time = time.time() - start_time

        return result

    def _start(self, handle: OperationHandle) -> OperationHandle:
        self._pending.append(handle)
        return handle

    def _wait(self, handle: OperationHandle, result: WorkerResult) -> int:
        status = handle.wait()
        if any(pending is handle for pending in self._pending):
            self._pending = [pending for pending in self._pending if pending is not handle]
            if status != 0:
                description = getattr(handle, "description", repr(handle))
                failure = ExternalToolError(f"{description}: exit status {status}")
                self._logger.warning(f"External operation failed, continuing: {failure}")
                result.tool_failures.append(str(failure))
        return status

    def _wait_pending(self, result: WorkerResult) -> None:
        for handle in list(self._pending):
            self._wait(handle, result)

    def _append(self, future: "Future[None]") -> None:
        # PageWriteError from the writer propagates and is fatal to this worker
        future.result()

    def _abort(self, reason: str) -> None:
        """Cancel this worker's outstanding turns so later images do not wait forever."""
        self.ring.cancel(self.task.index, reason)
        self.previews.cancel(self.task.index, reason)
