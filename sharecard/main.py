from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sharecard.core.config import settings
from sharecard.exceptions.handlers import register_exception_handlers
from sharecard.routers import router, favicon_router


# Initialize FastAPI application
app = FastAPI(
    title="ShareCard Server",
    description="Sharing metadata extraction API",
    version="1.0.0"
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

register_exception_handlers(app)

# Include the centralized router
app.include_router(router, prefix="/api")
app.include_router(favicon_router)
