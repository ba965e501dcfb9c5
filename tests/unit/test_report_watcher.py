"""
Unit tests for ReportWatcher and NewFileHandler.

The watchdog Observer is replaced by a mock; queued paths are fed to a
mock pipeline.
"""

import queue
import pytest
from pathlib import Path
from unittest.mock import Mock

from watchdog.events import (
    DirCreatedEvent,
    FileCreatedEvent,
    FileModifiedEvent,
)

from q3reportbot.services.report_watcher import NewFileHandler, ReportWatcher


@pytest.fixture
def mock_pipeline():
    pipeline = Mock()
    pipeline.stats = {'sent': 0, 'failed': 0}
    return pipeline


@pytest.fixture
def mock_observer():
    return Mock()


@pytest.fixture
def watcher(tmp_path, mock_pipeline, mock_observer):
    return ReportWatcher(tmp_path, mock_pipeline, observer_factory=lambda: mock_observer)


class TestNewFileHandler:
    
    def test_created_file_is_queued(self, tmp_path):
        paths = queue.Queue()
        handler = NewFileHandler(paths)
        
        handler.dispatch(FileCreatedEvent(str(tmp_path / "match.xml")))
        
        assert paths.get_nowait() == tmp_path / "match.xml"
    
    def test_created_directory_ignored(self, tmp_path):
        paths = queue.Queue()
        handler = NewFileHandler(paths)
        
        handler.dispatch(DirCreatedEvent(str(tmp_path / "2024")))
        
        assert paths.empty()
    
    def test_modification_ignored(self, tmp_path):
        paths = queue.Queue()
        handler = NewFileHandler(paths)
        
        handler.dispatch(FileModifiedEvent(str(tmp_path / "match.xml")))
        
        assert paths.empty()


class TestReportWatcher:
    
    def test_missing_folder_rejected(self, tmp_path, mock_pipeline):
        with pytest.raises(FileNotFoundError):
            ReportWatcher(tmp_path / "nope", mock_pipeline)
    
    def test_run_schedules_recursive_watch(self, watcher, mock_observer, tmp_path):
        stop_event = Mock()
        stop_event.is_set.return_value = True
        
        watcher.run(stop_event=stop_event)
        
        mock_observer.schedule.assert_called_once_with(
            watcher.handler, str(tmp_path), recursive=True
        )
        mock_observer.start.assert_called_once()
        mock_observer.stop.assert_called_once()
        mock_observer.join.assert_called_once()
    
    def test_run_processes_queued_paths_in_order(self, watcher, mock_pipeline):
        first = Path("a.xml")
        second = Path("b.xml")
        watcher.paths.put(first)
        watcher.paths.put(second)
        
        stop_event = Mock()
        stop_event.is_set.side_effect = [False, False, True]
        
        watcher.run(stop_event=stop_event, poll_interval=0.01)
        
        processed = [c.args[0] for c in mock_pipeline.process_file.call_args_list]
        assert processed == [first, second]
    
    def test_unexpected_error_does_not_stop_watcher(self, watcher, mock_pipeline):
        """A crash on one file is logged and the next file is still processed."""
        first = Path("a.xml")
        second = Path("b.xml")
        watcher.paths.put(first)
        watcher.paths.put(second)
        mock_pipeline.process_file.side_effect = [AttributeError("boom"), None]
        
        stop_event = Mock()
        stop_event.is_set.side_effect = [False, False, True]
        
        watcher.run(stop_event=stop_event, poll_interval=0.01)
        
        processed = [c.args[0] for c in mock_pipeline.process_file.call_args_list]
        assert processed == [first, second]
    
    def test_keyboard_interrupt_stops_observer(self, watcher, mock_pipeline, mock_observer):
        watcher.paths.put(Path("a.xml"))
        mock_pipeline.process_file.side_effect = KeyboardInterrupt
        
        watcher.run()
        
        mock_observer.stop.assert_called_once()
        mock_observer.join.assert_called_once()
    
    def test_empty_queue_keeps_polling(self, watcher, mock_pipeline):
        stop_event = Mock()
        stop_event.is_set.side_effect = [False, False, True]
        
        watcher.run(stop_event=stop_event, poll_interval=0.01)
        
        mock_pipeline.process_file.assert_not_called()
