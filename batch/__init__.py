"""Batch processing package."""

from .service import (
    BatchReport,
    FailedFile,
    output_path_for,
    process_directory,
    process_image_file,
)
from .strategies import SequentialStrategy, ThreadPoolStrategy, get_strategy

__all__ = [
    "BatchReport",
    "FailedFile",
    "output_path_for",
    "process_directory",
    "process_image_file",
    "SequentialStrategy",
    "ThreadPoolStrategy",
    "get_strategy",
]
