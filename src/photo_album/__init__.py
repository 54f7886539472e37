"""Photo album builder: ordered, captioned HTML galleries from image files."""

__version__ = "0.1.0"
