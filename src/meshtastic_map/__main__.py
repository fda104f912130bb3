"""Main application entry point."""

import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI

from .api.app import create_app
from .config import Config
from .database.engine import DatabaseEngine, close_database, init_database

logger = logging.getLogger(__name__)


class Application:
    """Main application controller."""

    def __init__(self, config: Config):
        """
        Initialize application.

        Args:
            config: Application configuration
        """
        self.config = config
        self.database: Optional[DatabaseEngine] = None
        self.app: Optional[FastAPI] = None

    def start(self) -> FastAPI:
        """Connect to the database and build the API."""
        logger.info("Starting Meshtastic Map API")
        logger.info(f"\n{self.config.display()}")

        logger.info("Initializing database...")
        self.database = init_database(self.config.database_url)

        self.app = create_app(
            title=self.config.api_title,
            version=self.config.api_version,
            enable_metrics=self.config.metrics_enabled,
            enable_compression=self.config.compression_enabled,
            static_dir=self.config.static_dir,
        )
        return self.app

    def stop(self) -> None:
        """Release the database engine."""
        logger.info("Stopping Meshtastic Map API...")
        close_database()
        self.database = None
        logger.info("Application stopped")

    def run(self) -> None:
        """Serve the API until interrupted."""
        app = self.start()
        try:
            logger.info(
                f"Server running at http://{self.config.api_host}:{self.config.api_port}"
            )
            uvicorn.run(
                app,
                host=self.config.api_host,
                port=self.config.api_port,
                log_config=None,  # keep our logging setup
                access_log=True,
            )
        finally:
            self.stop()


def main() -> None:
    """Main entry point - delegates to CLI."""
    from .cli import cli

    cli()


if __name__ == "__main__":
    main()
