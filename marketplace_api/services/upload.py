"""
Image upload service.
Validates an uploaded image, stores it and describes the stored file.
"""

from typing import Optional
from fastapi import UploadFile
import logging

from marketplace_api.config import Settings
from marketplace_api.models.user import User
from marketplace_api.schemas.upload import UploadResponse
from marketplace_api.utils.exceptions import ValidationError
from marketplace_api.utils.file_utils import FileStorage, FileValidator, base64_preview
from marketplace_api.utils.messages import ErrorMessages

logger = logging.getLogger(__name__)

UPLOADS_URL_PATH = "/uploads"


class UploadService:
    """Service for image uploads used as listing pictures."""

    def __init__(self, settings: Settings):
        self.validator = FileValidator(settings.max_file_size, settings.allowed_file_types)
        self.storage = FileStorage(settings.upload_dir)

    async def upload_image(self, file: Optional[UploadFile], current_user: User) -> UploadResponse:
        """
        Validate and store an uploaded image.

        Raises:
            ValidationError: If no file was sent or the file is not an acceptable image
        """
        if file is None or not file.filename:
            raise ValidationError(ErrorMessages.UPLOAD_NO_FILE)

        await file.seek(0)
        content = await file.read()

        width, height, mime_type = self.validator.validate(file.filename, file.content_type, content)

        filename = self.storage.generate_unique_filename(file.filename)
        await self.storage.save(content, filename)

        logger.info(
            f"Image uploaded by user {current_user.email}: {file.filename} -> {filename} "
            f"({len(content)} bytes, {width}x{height})"
        )

        return UploadResponse(
            filename=filename,
            original_name=file.filename,
            mime_type=mime_type,
            size=len(content),
            width=width,
            height=height,
            url=f"{UPLOADS_URL_PATH}/{filename}",
            base64_preview=base64_preview(content),
        )
