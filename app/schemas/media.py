from pydantic import BaseModel, Field

# Input: file the client is about to upload
class UploadCredentialsRequest(BaseModel):
    file_name: str = Field(..., min_length=1, description="Original file name, e.g. 'red-dress.jpg'")

# Output: everything the client needs for a direct upload to B2
class UploadCredentials(BaseModel):
    upload_url: str
    auth_token: str
    final_file_name: str        # Name in the bucket (includes a UUID)
    public_file_url_base: str   # e.g. https://f000.backblazeb2.com/file/<bucket>

    @property
    def public_url(self) -> str:
        return f"{self.public_file_url_base}/{self.final_file_name}"

class UploadCredentialsResponse(BaseModel):
    upload_url: str
    auth_token: str
    final_file_name: str
    public_file_url_base: str
    public_url: str     # Where the file will be served once uploaded
