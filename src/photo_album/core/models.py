"""Shared data models for the photo album."""

from enum import Enum
from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field


class RotationChoice(str, Enum):
    """Direction the user asked a photo to be turned."""

    CLOCKWISE = "clockwise"
    COUNTER_CLOCKWISE = "counter-clockwise"
    NONE = "none"


class AlbumConfig(BaseModel):
    """Configuration for one album run."""

    max_concurrent: int = Field(default=3, ge=1)
    thumbnail_percent: int = Field(default=10, ge=1, le=100)
    medium_percent: int = Field(default=25, ge=1, le=100)
    output_dir: str = "."
    page_name: str = "index.html"
    tool: Literal["magick", "pillow"] = "magick"
    magick_binary: str = "magick"
    poll_interval: float = Field(default=1.0, gt=0)
    answer_limit: int = Field(default=50, ge=2)
    debug: bool = False


class ImageTask(BaseModel):
    """One input image plus its derived artifacts and sequence index."""

    model_config = ConfigDict(frozen=True)

    source_path: str
    index: int = Field(ge=1)
    thumbnail_path: str
    medium_path: str
    thumbnail_name: str
    medium_name: str


class WorkerResult(BaseModel):
    """Outcome of a single image worker."""

    index: int
    source_path: str
    success: bool = False
    error: str = ""
    rotation: RotationChoice = RotationChoice.NONE
    caption: str = ""
    tool_failures: List[str] = Field(default_factory=list)
    processing_time: float = 0.0


class AlbumReport(BaseModel):
    """Summary of a finished album run."""

    page_path: str
    results: List[WorkerResult] = Field(default_factory=list)
    peak_concurrency: int = 0
    total_time: float = 0.0
    error: Optional[str] = None

    @property
    def failed(self) -> List[WorkerResult]:
        return [r for r in self.results if not r.success]

    @property
    def succeeded(self) -> bool:
        return not self.failed and self.error is None
