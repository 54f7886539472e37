"""Per-image workers and the album driver that dispatches them."""

from .album import AlbumBuilder, build_album
from .image_worker import ImageWorker

__all__ = [
    "AlbumBuilder",
    "ImageWorker",
    "build_album",
]
