"""
Local directory image scanning.

Functions for finding formula images in local directories.
"""

from pathlib import Path

from config import IMAGE_EXTENSIONS


def is_supported_image(path: Path) -> bool:
    """Check whether a path has one of the supported image extensions."""
    return path.suffix.lower() in IMAGE_EXTENSIONS


def scan_local_images(path: str | Path) -> list[Path]:
    """Find all image files in a directory or return a single image file.

    Only the top level of the directory is scanned. Extensions are matched
    case-insensitively against IMAGE_EXTENSIONS.

    Args:
        path: Path to directory or single image file to scan.

    Returns:
        Sorted list of image file paths.

    Raises:
        ValueError: If path doesn't exist or isn't a valid image/directory.
    """
    file_path = Path(path).resolve()

    if file_path.is_file():
        if is_supported_image(file_path):
            return [file_path]
        raise ValueError(f"{path} is not a supported image file")

    if not file_path.is_dir():
        raise ValueError(f"{path} is not a valid file or directory")

    return sorted(
        entry for entry in file_path.iterdir()
        if entry.is_file() and is_supported_image(entry)
    )
