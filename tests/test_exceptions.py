import pytest

from photo_album.core.exceptions import (
    ConfigurationError,
    CoordinationError,
    ExternalToolError,
    ImageValidationError,
    PageWriteError,
    PhotoAlbumError,
    PromptProtocolError,
    TurnCancelled,
    UsageError,
)


@pytest.mark.parametrize(
    "error",
    [
        UsageError("no images"),
        ImageValidationError("a.txt"),
        ConfigurationError("bad tool"),
        ExternalToolError("magick missing"),
        PageWriteError("disk full"),
        CoordinationError("token mismatch"),
        TurnCancelled(2, "image 1 failed"),
        PromptProtocolError("caption first"),
    ],
)
def test_every_error_is_a_photo_album_error(error) -> None:
    assert isinstance(error, PhotoAlbumError)


def test_image_validation_error_custom_reason() -> None:
    error = ImageValidationError("/data/x", "not a readable file")
    assert str(error) == "not a readable file: /data/x"
    assert error.path == "/data/x"
