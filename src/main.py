import os
import sys
import logging
import aiohttp
from aiohttp import web
from dotenv import load_dotenv

from src.api.routes import PROFILE_SERVICE, create_app
from src.application.profile_service import ProfileService
from src.infrastructure.database import PostgresProfileRepository
from src.infrastructure.geocoding_client import DEFAULT_GEOCODING_URL, GeocodingClient

logger = logging.getLogger(__name__)

def build_app(db_url: str, geocoding_api_key: str, geocoding_api_url: str = DEFAULT_GEOCODING_URL) -> web.Application:
    """
    Builds the application. The store, geocoder and service are created on
    startup and torn down on shutdown by a single cleanup context.
    """

    async def profile_service_ctx(app: web.Application):
        db_repository = PostgresProfileRepository(db_url=db_url)
        session = None
        try:
            await db_repository.create_schema()
            session = aiohttp.ClientSession()
            geocoder = GeocodingClient(session=session, api_key=geocoding_api_key, api_url=geocoding_api_url)
            app[PROFILE_SERVICE] = ProfileService(store=db_repository, geocoder=geocoder)
            yield
        finally:
            if session is not None:
                await session.close()
            await db_repository.dispose()
            logger.info("Closed HTTP session and database engine.")

    app = create_app()
    app.cleanup_ctx.append(profile_service_ctx)
    return app

def main():
    # Load environment variables from .env file
    load_dotenv()

    # Configure logging
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )

    # Get database URL and geocoding credentials from environment variables
    db_url = os.getenv("DATABASE_URL")
    geocoding_api_key = os.getenv("GEOCODING_API_KEY")
    geocoding_api_url = os.getenv("GEOCODING_API_URL", DEFAULT_GEOCODING_URL)
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8080"))

    if not db_url:
        logger.error("DATABASE_URL is not set in the environment.")
        sys.exit(1)

    if not geocoding_api_key:
        logger.error("GEOCODING_API_KEY is not set in the environment.")
        sys.exit(1)

    logger.info(f"Starting github-profiles service on {host}:{port}.")
    web.run_app(
        build_app(db_url, geocoding_api_key, geocoding_api_url),
        host=host,
        port=port,
        print=None,
    )

if __name__ == "__main__":
    main()
