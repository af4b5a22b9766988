"""
Open-Meteo adapter: geocode a place name, then fetch its current weather.

    GET https://geocoding-api.open-meteo.com/v1/search?name=<place>&count=1
    GET https://api.open-meteo.com/v1/forecast?latitude=..&longitude=..&current_weather=true
"""

import logging
from typing import Optional
import httpx

from concierge.core.capabilities import WeatherLookup
from concierge.core.contracts import Forecast
from concierge.core.errors import CapabilityError

logger = logging.getLogger("open_meteo")

GEOCODE_URL = "https://geocoding-api.open-meteo.com/v1/search"
FORECAST_URL = "https://api.open-meteo.com/v1/forecast"


class OpenMeteoAdapter(WeatherLookup):
    def __init__(self, timeout: float = 10.0, geocode_url: str = GEOCODE_URL, forecast_url: str = FORECAST_URL):
        self.timeout = timeout
        self.geocode_url = geocode_url
        self.forecast_url = forecast_url

    async def geocode_and_forecast(self, location: str) -> Optional[Forecast]:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                geo = await client.get(self.geocode_url, params={"name": location, "count": 1})
                geo.raise_for_status()
                results = geo.json().get("results") or []
                if not results:
                    logger.info("No geocoding match for '%s'", location)
                    return None

                place = results[0]
                weather = await client.get(
                    self.forecast_url,
                    params={
                        "latitude": place["latitude"],
                        "longitude": place["longitude"],
                        "current_weather": "true",
                    },
                )
                weather.raise_for_status()
                current = weather.json()["current_weather"]
                return Forecast(
                    resolved_name=place.get("name", location),
                    temperature_c=current["temperature"],
                    wind_speed_kph=current["windspeed"],
                )
            except httpx.HTTPError as e:
                logger.error("Weather request failed for '%s': %s", location, e)
                raise CapabilityError("weather", f"Weather lookup failed: {e}") from e
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                logger.error("Unexpected weather payload for '%s': %s", location, e)
                raise CapabilityError("weather", "Unexpected weather payload") from e
