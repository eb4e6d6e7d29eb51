import aiohttp
import asyncio
import logging

from src.domain.exceptions import GeocodingException
from src.domain.models import Coordinates

logger = logging.getLogger(__name__)

DEFAULT_GEOCODING_URL = "https://maps.googleapis.com/maps/api/geocode/json"
REQUEST_TIMEOUT = aiohttp.ClientTimeout(total=10, connect=5)
OK_STATUS = "OK"

class GeocodingClient:
    """
    Client for the Google Geocoding API.
    Resolves a free-text location to the coordinates of its best match.
    Lookups are never retried; every failure surfaces as GeocodingException.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        api_key: str,
        api_url: str = DEFAULT_GEOCODING_URL,
    ):
        self.session = session
        self.api_key = api_key
        self.api_url = api_url
        self.headers = {
            "Accept": "application/json",
            "User-Agent": "github-profiles-service",
        }

    async def fetch_coordinates(self, location: str) -> Coordinates:
        """
        Looks up a single location.

        Args:
            location (str): Free-text location, e.g. "London".

        Returns:
            Coordinates: Latitude and longitude of the first result.
        """
        params = {"address": location, "key": self.api_key}
        try:
            async with self.session.get(
                self.api_url, params=params, headers=self.headers, timeout=REQUEST_TIMEOUT
            ) as response:
                if response.status != 200:
                    logger.warning(f"Geocoding '{location}' failed with HTTP {response.status}.")
                    raise GeocodingException(location, f"HTTP {response.status}")
                data = await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"Geocoding request for '{location}' failed: {e}")
            raise GeocodingException(location, str(e)) from e

        status = data.get('status')
        results = data.get('results') or []
        if status != OK_STATUS or not results:
            reason = data.get('error_message') or status or "no results"
            logger.warning(f"Geocoding '{location}' returned {reason}.")
            raise GeocodingException(location, reason)

        point = results[0].get('geometry', {}).get('location', {})
        if 'lat' not in point or 'lng' not in point:
            raise GeocodingException(location, "result has no coordinates")

        return Coordinates(lat=point['lat'], lng=point['lng'])
