# itinerary/errors.py


class ItineraryError(Exception):
    """Base class for errors that stop an itinerary run."""

    message = "Itinerary processing failed"

    def __init__(self, message: str = None):
        super().__init__(message or self.message)


class AirportLookupError(ItineraryError):
    pass


class LookupNotFoundError(AirportLookupError):
    message = "Airport lookup not found"


class LookupMalformedError(AirportLookupError):
    message = "Airport lookup malformed"


class InputNotFoundError(ItineraryError):
    message = "Input not found"


class OutputWriteError(ItineraryError):
    message = "Error writing to output file"
