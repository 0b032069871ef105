"""Command-line entrypoint that serves the API with uvicorn."""

import uvicorn

from guest_cards.api.app import create_app
from guest_cards.config import Settings
from guest_cards.containers import build_container


def main() -> None:
    """Build the container and serve the app on the configured port."""
    settings = Settings()
    app = create_app(build_container(settings))
    uvicorn.run(app, host="0.0.0.0", port=settings.port, log_level="info")


if __name__ == "__main__":
    main()
