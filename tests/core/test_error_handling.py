# tests/core/test_error_handling.py

import pytest
import logging
from unittest import mock

# Custom exceptions from the application
from photo_album.core.exceptions import (
    PhotoAlbumError,
    ImageValidationError,
    PageWriteError,
    CoordinationError,
    TurnCancelled,
    PromptProtocolError,
    ConfigurationError,
)

# Decorator and context manager to be tested
from photo_album.core.error_handling import (
    with_error_handling,
    RunReport,
)


# --- Tests for Custom Exceptions ---

def test_custom_exceptions_raisable():
    """Test that custom exceptions can be raised and caught as album errors."""
    with pytest.raises(PhotoAlbumError):
        raise PageWriteError("Test page error")
    with pytest.raises(PhotoAlbumError):
        raise ConfigurationError("Test config error")
    with pytest.raises(CoordinationError):
        raise PromptProtocolError("caption before rotation")

def test_turn_cancelled_is_coordination_error():
    error = TurnCancelled(3, "image 2 failed")
    assert isinstance(error, CoordinationError)
    assert error.index == 3
    assert error.reason == "image 2 failed"
    assert "turn 3 cancelled" in str(error)

def test_image_validation_error_keeps_path():
    error = ImageValidationError("/tmp/x.txt")
    assert error.path == "/tmp/x.txt"
    assert str(error) == "not a valid image or path: /tmp/x.txt"


# --- Tests for @with_error_handling decorator ---

@pytest.fixture
def mock_logger():
    """Fixture to mock the logger used by the decorator."""
    with mock.patch('logging.getLogger') as mock_get_logger:
        mock_log_instance = mock.Mock()
        mock_get_logger.return_value = mock_log_instance
        yield mock_log_instance

def test_with_error_handling_logs_error(mock_logger):
    """Test that @with_error_handling logs and re-raises unmapped errors."""
    @with_error_handling
    def func_raising_error():
        raise ValueError("Original error")

    with pytest.raises(ValueError):
        func_raising_error()

    mock_logger.error.assert_called_once()
    args, kwargs = mock_logger.error.call_args
    assert kwargs.get('exc_info') is True

def test_with_error_handling_returns_value(mock_logger):
    @with_error_handling
    def fine():
        return 42

    assert fine() == 42
    mock_logger.error.assert_not_called()

def test_with_error_handling_passes_album_errors_through(mock_logger):
    """Album errors are already classified and are not logged again."""
    @with_error_handling
    def func_raising_album_error():
        raise PromptProtocolError("out of order")

    with pytest.raises(PromptProtocolError):
        func_raising_album_error()
    mock_logger.error.assert_not_called()

def test_with_error_handling_write_oserror_becomes_page_write_error(mock_logger):
    """OSError in a '_write*' function is wrapped into PageWriteError."""
    @with_error_handling
    def _write_fragment():
        raise PermissionError("read-only file system")

    with pytest.raises(PageWriteError) as excinfo:
        _write_fragment()

    assert "Failed to write page" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, PermissionError)
    mock_logger.error.assert_called_once()

def test_with_error_handling_read_header_oserror_becomes_validation_error(mock_logger):
    """OSError in 'read_header' is wrapped into ImageValidationError naming the path."""
    @with_error_handling
    def read_header(path):
        raise IsADirectoryError(21, "Is a directory", path)

    with pytest.raises(ImageValidationError) as excinfo:
        read_header("/tmp/photos")

    assert excinfo.value.path == "/tmp/photos"
    assert isinstance(excinfo.value.__cause__, IsADirectoryError)

def test_with_error_handling_other_oserror_is_reraised(mock_logger):
    @with_error_handling
    def something_else():
        raise OSError("nope")

    with pytest.raises(OSError):
        something_else()


# --- Tests for RunReport ---

def test_run_report_success_logs_info():
    with mock.patch('logging.getLogger') as mock_get_logger:
        mock_log = mock.Mock()
        mock_get_logger.return_value = mock_log
        with RunReport("Album of 2 images") as report:
            pass

    assert report.errors == []
    mock_log.info.assert_any_call("Starting Album of 2 images.")
    mock_log.info.assert_any_call("Album of 2 images completed successfully.")
    mock_log.warning.assert_not_called()

def test_run_report_collects_errors():
    with mock.patch('logging.getLogger') as mock_get_logger:
        mock_log = mock.Mock()
        mock_get_logger.return_value = mock_log
        with RunReport("Album") as report:
            report.add_error("page write failed", "a.jpg")
            report.add_error("turn 2 cancelled", "b.png")

    assert report.errors == [
        {"item": "a.jpg", "error": "page write failed"},
        {"item": "b.png", "error": "turn 2 cancelled"},
    ]
    mock_log.warning.assert_called_once_with("Album completed with 2 error(s).")
    assert mock_log.error.call_count == 2

def test_run_report_does_not_suppress_exceptions():
    with pytest.raises(RuntimeError):
        with RunReport("Album"):
            raise RuntimeError("driver crashed")

def test_run_report_logs_unhandled_exception(caplog):
    with caplog.at_level(logging.ERROR):
        logger = logging.getLogger("photo-album.RunReport")
        logger.addHandler(caplog.handler)
        try:
            with pytest.raises(KeyError):
                with RunReport("Album"):
                    raise KeyError("x")
        finally:
            logger.removeHandler(caplog.handler)

    assert any("unhandled exception" in r.getMessage() for r in caplog.records)
