import uvicorn

# Set up logging first
from sharecard.config.logging_config import setup_logging
setup_logging()

from sharecard.core.config import settings
from sharecard.main import app

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=settings.server_reload,
        reload_dirs=["."]
    )
