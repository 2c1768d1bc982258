from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from sharecard.config.logging_config import get_logger
from sharecard.dependencies.metadata_deps import get_metadata_assembler, get_upload_service
from sharecard.models.upload_model import UploadImageResponse
from sharecard.services.metadata_assembler import MetadataAssembler
from sharecard.services.upload_service import ImageUploadService

logger = get_logger(__name__)

router = APIRouter()


@router.get("/external")
async def get_external_metadata(
    url: Optional[str] = Query(None, description="Page URL, scheme optional"),
    assembler: MetadataAssembler = Depends(get_metadata_assembler),
):
    logger.info(f"Received request for external metadata: {url}")
    record = await assembler.assemble_external(url)
    return record.to_dict()


@router.get("/current")
def get_current_metadata(assembler: MetadataAssembler = Depends(get_metadata_assembler)):
    logger.info("Received request for local site metadata")
    record = assembler.assemble_local()
    return record.to_dict()


@router.post("/upload-image", response_model=UploadImageResponse, response_model_exclude_none=True)
async def upload_image(
    file: Optional[UploadFile] = File(None, description="Image file"),
    type: str = Form("og", description="'og' or 'favicon'"),
    service: ImageUploadService = Depends(get_upload_service),
):
    """Save an OG image or favicon into the public directory (development only)"""
    data = await file.read() if file is not None else None
    filename = file.filename if file is not None else None
    logger.info(f"Received {type} image upload: {filename}")
    return service.upload(filename, data, type)
