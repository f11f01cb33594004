"""Shared endpoints such as image upload staging."""

from fastapi import APIRouter, File, UploadFile, status

from inkpost.api.v1.dependencies import CurrentUserDep, FileStagerDep
from inkpost.schemas.common import UploadedImage

router = APIRouter(prefix="/common", tags=["common"])


@router.post("/image", response_model=UploadedImage, status_code=status.HTTP_201_CREATED)
async def upload_image(
    current_user: CurrentUserDep,
    stager: FileStagerDep,
    image: UploadFile = File(...),
) -> UploadedImage:
    """Store an uploaded image in the temp folder.

    The returned ``fileName`` is what ``POST /posts`` expects in ``image``.
    """
    file_name = stager.save_upload(image.file, image.filename or "")
    return UploadedImage(file_name=file_name)
