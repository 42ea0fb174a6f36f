"""Run the API server with uvicorn."""

import uvicorn

from accounts.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "accounts.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
