"""
Image upload endpoint.
"""

from typing import Optional
from fastapi import APIRouter, Depends, File, UploadFile, status

from marketplace_api.models.user import User
from marketplace_api.schemas.envelope import ApiResponse, success_response
from marketplace_api.schemas.upload import UploadResponse
from marketplace_api.services.upload import UploadService
from marketplace_api.utils.dependencies import get_current_user, get_upload_service
from marketplace_api.utils.messages import SuccessMessages


router = APIRouter(prefix="/upload", tags=["Upload"])


@router.post(
    "",
    response_model=ApiResponse[UploadResponse],
    status_code=status.HTTP_200_OK,
    summary="Upload an image",
    description="Store an image (multipart field 'file') for use as a listing picture"
)
async def upload_image(
    file: Optional[UploadFile] = File(None, description="Image file"),
    current_user: User = Depends(get_current_user),
    upload_service: UploadService = Depends(get_upload_service)
):
    """
    Raises:
        ValidationError: If no file was sent or it is not an acceptable image
    """
    result = await upload_service.upload_image(file, current_user)
    return success_response(SuccessMessages.IMAGE_RECEIVED, result)
