"""
Folder watcher that feeds new report files to the pipeline.

The watchdog observer thread only enqueues paths; documents are processed
one at a time on the thread that calls ReportWatcher.run().
"""

import logging
import os
import queue
import threading
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Optional, Union

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

if TYPE_CHECKING:
    from q3reportbot.api.pipeline import ReportPipeline

logger = logging.getLogger(__name__)


class NewFileHandler(FileSystemEventHandler):
    """Puts the path of every newly created file on a queue."""
    
    def __init__(self, paths: queue.Queue):
        super().__init__()
        self.paths = paths
    
    def on_created(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            return
        path = Path(os.fsdecode(event.src_path))
        logger.debug(f"Queued created file: {path}")
        self.paths.put(path)


class ReportWatcher:
    """
    Watches a folder (recursively by default) for new match reports.
    
    Usage:
        watcher = ReportWatcher("/srv/q3/stats", pipeline)
        watcher.run()  # blocks until Ctrl+C
    """
    
    def __init__(
        self,
        folder: Union[str, Path],
        pipeline: 'ReportPipeline',
        recursive: bool = True,
        observer_factory: Callable[[], Observer] = Observer
    ):
        """
        Initialize watcher.
        
        Args:
            folder: Folder the game server writes reports into
            pipeline: Pipeline that processes each new file
            recursive: Also watch sub-folders
            observer_factory: Observer constructor (tests inject a mock)
        
        Raises:
            FileNotFoundError: If folder does not exist or is not a directory
        """
        self.folder = Path(folder)
        if not self.folder.is_dir():
            raise FileNotFoundError(f"Watch folder not found: {self.folder}")
        
        self.pipeline = pipeline
        self.recursive = recursive
        self._observer_factory = observer_factory
        
        self.paths: queue.Queue = queue.Queue()
        self.handler = NewFileHandler(self.paths)
    
    def run(
        self,
        stop_event: Optional[threading.Event] = None,
        poll_interval: float = 0.5
    ) -> None:
        """
        Watch the folder and process files until stopped.
        
        Args:
            stop_event: Event that ends the loop when set (None: run until
                        KeyboardInterrupt)
            poll_interval: Seconds to wait on the queue between stop checks
        """
        observer = self._observer_factory()
        observer.schedule(self.handler, str(self.folder), recursive=self.recursive)
        observer.start()
        logger.info(f"Watching for changes in {self.folder}")
        
        try:
            while stop_event is None or not stop_event.is_set():
                try:
                    path = self.paths.get(timeout=poll_interval)
                except queue.Empty:
                    continue
                try:
                    self.pipeline.process_file(path)
                except Exception as e:
                    logger.error(f"Unexpected error processing {path}: {e}", exc_info=True)
        except KeyboardInterrupt:
            logger.info("Interrupted, stopping watcher")
        finally:
            observer.stop()
            observer.join()
            logger.info(
                f"Watcher stopped: sent={self.pipeline.stats['sent']}, "
                f"failed={self.pipeline.stats['failed']}"
            )
