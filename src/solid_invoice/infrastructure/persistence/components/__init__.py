"""Storage components shared by file-based persistence strategies."""

from .file_manager import FileManager
from .serializer import JSONSerializer

__all__ = [
    "FileManager",
    "JSONSerializer",
]
