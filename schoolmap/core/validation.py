"""
Input validation for school records and reference coordinates.

Every check here is pure: nothing touches the record store, and the first
failing constraint short-circuits with a field-specific ``ValidationError``.
"""
import math
import re
from typing import Any, Mapping, Optional

from schoolmap.models.location import Coordinate
from schoolmap.models.school import NewSchool

MIN_LATITUDE, MAX_LATITUDE = -90.0, 90.0
MIN_LONGITUDE, MAX_LONGITUDE = -180.0, 180.0

DECIMAL_PATTERN = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)

# Client-facing messages
MISSING_FIELDS_MESSAGE = "All fields are required: name, address, latitude, longitude"
INVALID_NAME_MESSAGE = "Name must be a non-empty string"
INVALID_ADDRESS_MESSAGE = "Address must be a non-empty string"
INVALID_LATITUDE_MESSAGE = "Latitude must be a number between -90 and 90"
INVALID_LONGITUDE_MESSAGE = "Longitude must be a number between -180 and 180"
MISSING_COORDINATE_MESSAGE = "User latitude and longitude are required as query parameters"
INVALID_USER_LATITUDE_MESSAGE = "User latitude must be a number between -90 and 90"
INVALID_USER_LONGITUDE_MESSAGE = "User longitude must be a number between -180 and 180"


class ValidationError(ValueError):
    """Raised when a record or coordinate fails validation.

    ``field`` names the offending input (``"fields"`` when required inputs are
    absent, ``"coordinates"`` when both query coordinates are absent) and
    ``reason`` is a short machine-readable tag.
    """

    def __init__(self, field: str, reason: str, message: str):
        super().__init__(message)
        self.field = field
        self.reason = reason
        self.message = message

    def __repr__(self) -> str:
        return f"ValidationError(field={self.field!r}, reason={self.reason!r})"


def parse_number(value: Any) -> Optional[float]:
    """Parse ``value`` into a finite float, or return None if it is not one.

    Numbers pass through; strings are parsed after stripping whitespace.
    Only plain ASCII decimal literals are accepted; booleans, empty strings,
    NaN and infinities are rejected.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not DECIMAL_PATTERN.fullmatch(text):
            return None
        number = float(text)
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def _non_empty_string(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    trimmed = value.strip()
    return trimmed or None


def _in_range(value: Any, lower: float, upper: float) -> Optional[float]:
    number = parse_number(value)
    if number is None or number < lower or number > upper:
        return None
    return number


def validate_new_school(payload: Mapping[str, Any]) -> NewSchool:
    """Validate and normalize a candidate school record.

    Returns a ``NewSchool`` with trimmed name/address and float coordinates.
    """
    name = payload.get("name")
    address = payload.get("address")
    latitude = payload.get("latitude")
    longitude = payload.get("longitude")

    # JSON null coordinates are present, just invalid
    if (
        _is_missing(name)
        or _is_missing(address)
        or "latitude" not in payload
        or "longitude" not in payload
    ):
        raise ValidationError("fields", "missing", MISSING_FIELDS_MESSAGE)

    clean_name = _non_empty_string(name)
    if clean_name is None:
        raise ValidationError("name", "invalid", INVALID_NAME_MESSAGE)

    clean_address = _non_empty_string(address)
    if clean_address is None:
        raise ValidationError("address", "invalid", INVALID_ADDRESS_MESSAGE)

    lat = _in_range(latitude, MIN_LATITUDE, MAX_LATITUDE)
    if lat is None:
        raise ValidationError("latitude", "out_of_range", INVALID_LATITUDE_MESSAGE)

    lon = _in_range(longitude, MIN_LONGITUDE, MAX_LONGITUDE)
    if lon is None:
        raise ValidationError("longitude", "out_of_range", INVALID_LONGITUDE_MESSAGE)

    return NewSchool(name=clean_name, address=clean_address, latitude=lat, longitude=lon)


def validate_coordinate(latitude: Any, longitude: Any) -> Coordinate:
    """Validate a query's reference point."""
    latitude_missing = _is_missing(latitude)
    longitude_missing = _is_missing(longitude)
    if latitude_missing and longitude_missing:
        raise ValidationError("coordinates", "both_missing", MISSING_COORDINATE_MESSAGE)
    if latitude_missing:
        raise ValidationError("latitude", "missing", MISSING_COORDINATE_MESSAGE)
    if longitude_missing:
        raise ValidationError("longitude", "missing", MISSING_COORDINATE_MESSAGE)

    lat = _in_range(latitude, MIN_LATITUDE, MAX_LATITUDE)
    if lat is None:
        raise ValidationError("latitude", "out_of_range", INVALID_USER_LATITUDE_MESSAGE)

    lon = _in_range(longitude, MIN_LONGITUDE, MAX_LONGITUDE)
    if lon is None:
        raise ValidationError("longitude", "out_of_range", INVALID_USER_LONGITUDE_MESSAGE)

    return Coordinate(latitude=lat, longitude=lon)
