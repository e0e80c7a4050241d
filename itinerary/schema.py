# itinerary/schema.py

from dataclasses import dataclass
from typing import Tuple

IATA_PREFIX = "#"
ICAO_PREFIX = "##"


@dataclass(frozen=True)
class AirportRecord:
    name: str
    icao_code: str
    iata_code: str

    @property
    def iata_token(self) -> str:
        return IATA_PREFIX + self.iata_code

    @property
    def icao_token(self) -> str:
        return ICAO_PREFIX + self.icao_code

    def tokens(self) -> Tuple[str, str]:
        """IATA token first, then ICAO, the order they enter the lookup."""
        return self.iata_token, self.icao_token
