from fastapi import APIRouter, Depends

from app.schemas.media import UploadCredentialsRequest, UploadCredentialsResponse
from app.services.b2 import B2Client, get_b2_client

router = APIRouter()


@router.post(
    "/upload-credentials",
    response_model=UploadCredentialsResponse,
    summary="Get Upload Credentials",
    description="Mints a short-lived Backblaze B2 upload URL for a direct client-side upload."
)
async def get_upload_credentials(
    data: UploadCredentialsRequest,
    b2: B2Client = Depends(get_b2_client)
):
    credentials = await b2.get_upload_credentials(data.file_name)
    return UploadCredentialsResponse(
        **credentials.model_dump(),
        public_url=credentials.public_url
    )
