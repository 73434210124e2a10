"""Media providers and the pool routing lifecycle hooks to them."""

from .base import MediaProvider
from .file import FileProvider
from .image import ImageProvider
from .path_generator import DefaultPathGenerator
from .pool import Pool

__all__ = [
    "DefaultPathGenerator",
    "FileProvider",
    "ImageProvider",
    "MediaProvider",
    "Pool",
]
