"""Run the API with uvicorn on the configured host and port."""

import uvicorn

from food_insight.config import Settings


def main() -> None:
    """Serve the ASGI app."""
    settings = Settings()
    uvicorn.run(
        "food_insight.api.asgi:app",
        host=settings.host,
        port=settings.port,
        reload=False,
    )


if __name__ == "__main__":
    main()
