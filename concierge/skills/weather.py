import logging
import re
from typing import Optional

from concierge.core.capabilities import WeatherLookup
from concierge.core.contracts import Query, ResolverResult
from concierge.skills.base import Resolver

logger = logging.getLogger("weather_skill")

_LOCATION = re.compile(r"in ([a-zA-Z\s]+)")

DEFAULT_LOCATION = "London"
UNAVAILABLE = "Unable to fetch weather at the moment."


def extract_location(text: str) -> Optional[str]:
    m = _LOCATION.search(text or "")
    if not m:
        return None
    return m.group(1).strip() or None


class WeatherSkill(Resolver):
    name = "weather"

    def __init__(self, lookup: WeatherLookup, default_location: str = DEFAULT_LOCATION):
        self.lookup = lookup
        self.default_location = default_location

    async def resolve(self, query: Query) -> ResolverResult:
        location = extract_location(query.text)
        candidates = [location] if location else []
        if self.default_location not in candidates:
            candidates.append(self.default_location)
        logger.info("WeatherSkill: Looking up %s", candidates)

        # Only "no such place" moves on to the default; a failed lookup does not.
        for place in candidates:
            try:
                found = await self.lookup.geocode_and_forecast(place)
            except Exception as e:
                logger.warning("WeatherSkill: Lookup failed for '%s': %s", place, e)
                return ResolverResult.declined(UNAVAILABLE)
            if found is not None:
                return ResolverResult.ok(
                    f"The weather in {found.resolved_name} is {found.temperature_c}°C "
                    f"with wind speed {found.wind_speed_kph} km/h."
                )
            logger.info("WeatherSkill: No match for '%s'", place)
        return ResolverResult.declined(UNAVAILABLE)
