from fastapi import APIRouter, Depends, Response

from sharecard.dependencies.metadata_deps import get_favicon_service
from sharecard.services.favicon_service import FaviconService

router = APIRouter()

favicon_router = APIRouter()


@router.get("/")
def read_root():
    return {"message": "ShareCard metadata server is running!"}


@favicon_router.get("/favicon.ico", include_in_schema=False)
def get_favicon(service: FaviconService = Depends(get_favicon_service)):
    favicon = service.load()
    if favicon is None:
        return Response(status_code=204)

    content, content_type = favicon
    return Response(
        content=content,
        media_type=content_type,
        headers={"Cache-Control": "public, max-age=31536000, immutable"},
    )
