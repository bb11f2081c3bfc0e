"""
Application entry point.
"""

import uvicorn

from field_service.api.app import create_app
from field_service.config.settings import settings

app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "field_service.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
