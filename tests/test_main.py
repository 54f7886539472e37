"""Tests for main.py CLI functionality."""

from unittest.mock import patch

import pytest

from photo_album.core.exceptions import PhotoAlbumError
from photo_album.core.models import AlbumReport, WorkerResult
from photo_album.main import (
    EXIT_INTERRUPTED,
    EXIT_OK,
    EXIT_USAGE,
    EXIT_WORKER_FAILED,
    build_parser,
    main,
)
from photo_album.testing.fakes import write_test_image


def _report(success=True):
    return AlbumReport(
        page_path="index.html",
        results=[WorkerResult(index=1, source_path="a.jpg", success=success)],
    )


class TestBuildParser:
    """Tests for the argument parser."""

    def test_defaults(self):
        args = build_parser().parse_args(["a.jpg", "b.png"])
        assert args.images == ["a.jpg", "b.png"]
        assert args.max_concurrent == 3
        assert args.thumbnail_percent == 10
        assert args.medium_percent == 25
        assert args.output_dir == "."
        assert args.page_name == "index.html"
        assert args.tool == "magick"
        assert args.debug is False

    def test_all_options(self):
        args = build_parser().parse_args(
            [
                "--max-concurrent", "1",
                "--thumbnail-percent", "5",
                "--medium-percent", "40",
                "--output-dir", "site",
                "--page-name", "album.html",
                "--tool", "pillow",
                "--debug",
                "a.jpg",
            ]
        )
        assert args.max_concurrent == 1
        assert args.thumbnail_percent == 5
        assert args.medium_percent == 40
        assert args.output_dir == "site"
        assert args.page_name == "album.html"
        assert args.tool == "pillow"
        assert args.debug is True

    def test_unknown_tool_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--tool", "gimp", "a.jpg"])


class TestMainCLI:
    """Tests for the main CLI functionality."""

    def test_main_version_command(self):
        with patch("builtins.print") as mock_print:
            with pytest.raises(SystemExit) as excinfo:
                main(["--version"])
        mock_print.assert_any_call("Photo Album CLI")
        mock_print.assert_any_call("Version 0.1.0")
        assert excinfo.value.code == EXIT_OK

    def test_main_without_images_is_usage_error(self):
        with patch("photo_album.main.AlbumBuilder") as mock_builder:
            with pytest.raises(SystemExit) as excinfo:
                main([])
        assert excinfo.value.code == EXIT_USAGE
        mock_builder.assert_not_called()

    def test_main_invalid_image_stops_before_any_worker(self, tmp_path):
        good = write_test_image(str(tmp_path / "a.jpg"))
        bad = tmp_path / "b.jpg"
        bad.write_text("not an image")

        with patch("photo_album.main.AlbumBuilder") as mock_builder:
            with pytest.raises(SystemExit) as excinfo:
                main([good, str(bad)])
        assert excinfo.value.code == EXIT_USAGE
        mock_builder.assert_not_called()

    def test_main_invalid_option_value(self, tmp_path):
        good = write_test_image(str(tmp_path / "a.jpg"))
        with pytest.raises(SystemExit) as excinfo:
            main(["--max-concurrent", "0", good])
        assert excinfo.value.code == EXIT_USAGE

    def test_main_builds_album(self, tmp_path):
        good = write_test_image(str(tmp_path / "a.jpg"))
        with patch("photo_album.main.AlbumBuilder") as mock_builder:
            mock_builder.return_value.build.return_value = _report()
            with pytest.raises(SystemExit) as excinfo:
                main(["--output-dir", str(tmp_path / "out"), "--tool", "pillow", good])

        assert excinfo.value.code == EXIT_OK
        config = mock_builder.call_args.args[0]
        assert config.output_dir == str(tmp_path / "out")
        assert config.tool == "pillow"
        mock_builder.return_value.build.assert_called_once_with([good])

    def test_main_worker_failure_exit_code(self, tmp_path):
        good = write_test_image(str(tmp_path / "a.jpg"))
        with patch("photo_album.main.AlbumBuilder") as mock_builder:
            mock_builder.return_value.build.return_value = _report(success=False)
            with pytest.raises(SystemExit) as excinfo:
                main([good])
        assert excinfo.value.code == EXIT_WORKER_FAILED

    def test_main_album_error_exit_code(self, tmp_path):
        good = write_test_image(str(tmp_path / "a.jpg"))
        with patch("photo_album.main.AlbumBuilder") as mock_builder:
            mock_builder.return_value.build.side_effect = PhotoAlbumError("boom")
            with pytest.raises(SystemExit) as excinfo:
                main([good])
        assert excinfo.value.code == EXIT_WORKER_FAILED

    def test_main_interrupted(self, tmp_path):
        good = write_test_image(str(tmp_path / "a.jpg"))
        with patch("photo_album.main.AlbumBuilder") as mock_builder:
            mock_builder.return_value.build.side_effect = KeyboardInterrupt
            with pytest.raises(SystemExit) as excinfo:
                main([good])
        assert excinfo.value.code == EXIT_INTERRUPTED

    def test_main_debug_sets_debug_logging(self, tmp_path):
        good = write_test_image(str(tmp_path / "a.jpg"))
        with patch("photo_album.main.AlbumBuilder") as mock_builder, patch(
            "photo_album.main.set_debug"
        ) as mock_debug:
            mock_builder.return_value.build.return_value = _report()
            with pytest.raises(SystemExit):
                main(["--debug", good])
        mock_debug.assert_called_once_with(True)

    def test_main_output_dir_is_a_file(self, tmp_path):
        good = write_test_image(str(tmp_path / "a.jpg"))
        blocker = tmp_path / "site"
        blocker.write_text("a file, not a directory")

        with patch("photo_album.main.AlbumBuilder") as mock_builder:
            with pytest.raises(SystemExit) as excinfo:
                main(["--output-dir", str(blocker), good])
        assert excinfo.value.code == EXIT_USAGE
        mock_builder.assert_not_called()

    def test_main_creates_missing_output_dir(self, tmp_path):
        good = write_test_image(str(tmp_path / "a.jpg"))
        target = tmp_path / "nested" / "site"
        with patch("photo_album.main.AlbumBuilder") as mock_builder:
            mock_builder.return_value.build.return_value = _report()
            with pytest.raises(SystemExit) as excinfo:
                main(["--output-dir", str(target), good])
        assert excinfo.value.code == EXIT_OK
        assert target.is_dir()
