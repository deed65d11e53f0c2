"""Run the PocketTasks AI server with uvicorn."""

import uvicorn

from pockettasks.config import settings


def main() -> None:
    uvicorn.run(
        "pockettasks.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    main()
