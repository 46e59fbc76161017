from roomivo.schemas.base import CamelModel


class ImageUploadResponse(CamelModel):
    success: bool = True
    image_url: str
    public_id: str


class ImageDeleteResponse(CamelModel):
    success: bool = True
    message: str
