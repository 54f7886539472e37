"""Album driver: dispatches one worker per image and collects the outcome."""

import os
import time
from typing import List, Optional, Sequence

from ..coordination import AdmissionController, PageWriter, PreviewSequencer, TokenRing
from ..core import (
    AlbumConfig,
    AlbumReport,
    RunReport,
    TerminalConsole,
    create_image_tasks,
    get_logger,
    prepare_output_dir,
)
from ..core.protocols import ConsoleProtocol, ImageToolProtocol
from ..tools import create_tool
from .image_worker import ImageWorker


def log_configuration(config: AlbumConfig, image_count: int) -> None:
    """Log album configuration."""
    logger = get_logger("photo-album.album")
    logger.info("=" * 80)
    logger.info("PHOTO ALBUM")
    logger.info("=" * 80)
    logger.info(f"  Images:          {image_count}")
    logger.info(f"  Output:          {os.path.join(config.output_dir, config.page_name)}")
    logger.info(f"  Image tool:      {config.tool}")
    logger.info(f"  Thumbnail size:  {config.thumbnail_percent}%")
    logger.info(f"  Medium size:     {config.medium_percent}%")
    logger.info(f"  Max concurrent:  {config.max_concurrent}")
    logger.info("=" * 80)


def log_final_statistics(report: AlbumReport) -> None:
    """Log final album statistics."""
    logger = get_logger("photo-album.album")
    tool_failures = sum(len(r.tool_failures) for r in report.results)

    logger.info("=" * 80)
    logger.info("ALBUM COMPLETED")
    logger.info("=" * 80)
    logger.info(f"Total execution time: {report.total_time:.1f}s")
    logger.info(f"Images added: {len(report.results) - len(report.failed)}/{len(report.results)}")
    logger.info(f"Peak concurrent workers: {report.peak_concurrency}")
    logger.info(f"External tool failures: {tool_failures}")
    logger.info("=" * 80)


class AlbumBuilder:
    """
    Builds the album page from a list of already validated image paths.

    The turn chains and the page writer are created once, before the first
    worker starts, and shared by every worker of the run.
    """

    def __init__(
        self,
        config: Optional[AlbumConfig] = None,
        tool: Optional[ImageToolProtocol] = None,
        console: Optional[ConsoleProtocol] = None,
    ):
        self.config = config or AlbumConfig()
        self.tool = tool or create_tool(self.config.tool, self.config.magick_binary)
        self.console = console or TerminalConsole()
        self.admission = AdmissionController(
            max_concurrent=self.config.max_concurrent,
            poll_interval=self.config.poll_interval,
        )
        # workers of the most recent build
        self.workers: List[ImageWorker] = []
        self._logger = get_logger("photo-album.album")

    @property
    def page_path(self) -> str:
        return os.path.join(self.config.output_dir, self.config.page_name)

    def build(self, paths: Sequence[str]) -> AlbumReport:
        tasks = create_image_tasks(paths, self.config.output_dir)
        report = AlbumReport(page_path=self.page_path)
        if not tasks:
            return report

        log_configuration(self.config, len(tasks))
        prepare_output_dir(self.config.output_dir)
        self.workers = []
        self.admission.reset()
        start_time = time.time()

        ring = TokenRing(len(tasks))
        previews = PreviewSequencer(len(tasks))
        self.console.show("Image Processing will begin now...\n")

        with RunReport(f"Album of {len(tasks)} images") as run_report:
            with PageWriter(self.page_path) as page:
                for task in tasks:
                    self.admission.admit(self.workers)
                    worker = ImageWorker(
                        task, self.tool, ring, previews, page, self.console, self.config
                    )
                    self._logger.debug(f"Dispatching worker {task.index} for {task.source_path}")
                    worker.start()
                    self.workers.append(worker)

                # keep the driver alive until every worker is done with the terminal
                self.admission.join_all(self.workers)

            for worker in self.workers:
                report.results.append(worker.result)
                if not worker.result.success:
                    run_report.add_error(
                        worker.result.error or "unknown error", worker.result.source_path
                    )

        report.peak_concurrency = self.admission.peak_alive
        report.total_time = time.time() - start_time
        log_final_statistics(report)

        self.console.show("=============== END OF PHOTO CONVERSION ===============")
        self.console.show(
            f"Digital Photo Album is Complete!\n'{self.config.page_name}' album and all "
            f"edited images are in {os.path.abspath(self.config.output_dir)}."
        )
        return report


def build_album(
    paths: Sequence[str],
    config: Optional[AlbumConfig] = None,
    tool: Optional[ImageToolProtocol] = None,
    console: Optional[ConsoleProtocol] = None,
) -> AlbumReport:
    """Build an album for `paths` with a fresh AlbumBuilder."""
    return AlbumBuilder(config, tool, console).build(paths)
