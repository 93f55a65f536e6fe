import uvicorn

from app.core.config import get_settings
from app.main import create_application


def run() -> None:
    """Serve the API on the configured host and port"""
    settings = get_settings()
    uvicorn.run(
        create_application(settings),
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
