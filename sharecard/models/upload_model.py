from pydantic import BaseModel, ConfigDict, Field


class UploadImageResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    url: str
    size: int
    upload_date: str = Field(alias="uploadDate")
    width: int | None = None
    height: int | None = None
