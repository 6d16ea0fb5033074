"""
Image source adapters.

This module provides the file-system side of preprocessing:
- Local directories (finding formula images)
- Image files (decoding to arrays, encoding results)
"""

from .local import scan_local_images, is_supported_image
from .files import load_image, save_image

__all__ = [
    "scan_local_images",
    "is_supported_image",
    "load_image",
    "save_image",
]
