"""
File upload utilities for image validation and storage.
"""

import base64
import io
import uuid
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import aiofiles
from PIL import Image, UnidentifiedImageError

from marketplace_api.utils.exceptions import ValidationError


class FileValidator:
    """Validates uploaded image content against the configured limits."""

    # Supported image formats and their MIME types
    SUPPORTED_FORMATS: Dict[str, List[str]] = {
        "image/jpeg": [".jpg", ".jpeg"],
        "image/png": [".png"],
        "image/webp": [".webp"],
        "image/gif": [".gif"],
    }

    # Pillow format names per MIME type
    PIL_FORMATS: Dict[str, List[str]] = {
        "image/jpeg": ["jpeg", "mpo"],
        "image/png": ["png"],
        "image/webp": ["webp"],
        "image/gif": ["gif"],
    }

    MAX_WIDTH = 10000
    MAX_HEIGHT = 10000

    def __init__(self, max_file_size: int, allowed_types: List[str]):
        self.max_file_size = max_file_size
        self.allowed_types = [t for t in allowed_types if t in self.SUPPORTED_FORMATS]

    def validate_extension(self, filename: str, mime_type: str) -> str:
        """
        Returns:
            Lowercase file extension

        Raises:
            ValidationError: If the extension is missing or does not match the MIME type
        """
        extension = Path(filename).suffix.lower()
        if not extension:
            raise ValidationError("File must have an extension")

        expected = self.SUPPORTED_FORMATS.get(mime_type, [])
        if extension not in expected:
            raise ValidationError(
                f"File extension '{extension}' doesn't match MIME type '{mime_type}'"
            )
        return extension

    def validate_mime_type(self, mime_type: Optional[str]) -> str:
        if not mime_type:
            raise ValidationError("MIME type is required")

        if mime_type not in self.allowed_types:
            raise ValidationError(
                f"File type '{mime_type}' not allowed. "
                f"Allowed types: {', '.join(self.allowed_types)}"
            )
        return mime_type

    def validate_size(self, file_size: int) -> int:
        if file_size <= 0:
            raise ValidationError("File is empty")

        if file_size > self.max_file_size:
            max_mb = self.max_file_size / (1024 * 1024)
            actual_mb = file_size / (1024 * 1024)
            raise ValidationError(
                f"File size ({actual_mb:.1f}MB) exceeds maximum allowed size ({max_mb:.1f}MB)"
            )
        return file_size

    def validate_image(self, content: bytes, mime_type: str) -> Tuple[int, int]:
        """
        Decode the image and check its format and dimensions.

        Returns:
            Tuple of (width, height)

        Raises:
            ValidationError: If the content is not a decodable image of the declared type
        """
        try:
            with Image.open(io.BytesIO(content)) as img:
                width, height = img.size
                pil_format = img.format.lower() if img.format else ""
                img.verify()
        except (UnidentifiedImageError, OSError, SyntaxError) as e:
            raise ValidationError(f"Invalid image file: {e}")

        if pil_format not in self.PIL_FORMATS.get(mime_type, []):
            raise ValidationError(
                f"Image format '{pil_format}' doesn't match MIME type '{mime_type}'"
            )

        if width > self.MAX_WIDTH or height > self.MAX_HEIGHT:
            raise ValidationError(
                f"Image dimensions ({width}x{height}px) exceed maximum "
                f"({self.MAX_WIDTH}x{self.MAX_HEIGHT}px)"
            )
        return width, height

    def validate(self, filename: str, mime_type: Optional[str], content: bytes) -> Tuple[int, int, str]:
        """
        Full validation of an uploaded image.

        Returns:
            Tuple of (width, height, mime_type)
        """
        mime_type = self.validate_mime_type(mime_type)
        self.validate_extension(filename, mime_type)
        self.validate_size(len(content))
        width, height = self.validate_image(content, mime_type)
        return width, height, mime_type


class FileStorage:
    """Stores uploaded files under the upload directory with generated names."""

    def __init__(self, base_dir: str):
        self.base_dir = Path(base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def generate_unique_filename(original_filename: str) -> str:
        """Random filename preserving the original extension."""
        extension = Path(original_filename).suffix.lower()
        return f"{uuid.uuid4().hex}{extension}"

    async def save(self, content: bytes, filename: str) -> Path:
        """
        Write content to base_dir/filename.

        Raises:
            OSError: If the write fails; a partial file is removed first
        """
        file_path = self.base_dir / filename
        try:
            async with aiofiles.open(file_path, "wb") as f:
                await f.write(content)
        except OSError:
            self.delete(filename)
            raise
        return file_path

    def delete(self, filename: str) -> bool:
        file_path = self.base_dir / filename
        if file_path.exists():
            file_path.unlink()
            return True
        return False


def base64_preview(content: bytes, length: int = 100) -> str:
    """First characters of the base64 encoding, followed by an ellipsis."""
    return base64.b64encode(content).decode("ascii")[:length] + "..."
