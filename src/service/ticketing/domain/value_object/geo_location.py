from math import asin, cos, radians, sin, sqrt

import attrs


EARTH_RADIUS_KM = 6371.0
DEFAULT_NEAR_RADIUS_KM = 50.0


def _validate_longitude(instance: object, attribute: attrs.Attribute, value: float) -> None:
    if not -180 <= value <= 180:
        raise ValueError(f'{attribute.name} must be between -180 and 180')


def _validate_latitude(instance: object, attribute: attrs.Attribute, value: float) -> None:
    if not -90 <= value <= 90:
        raise ValueError(f'{attribute.name} must be between -90 and 90')


@attrs.frozen
class GeoLocation:
    longitude: float = attrs.field(converter=float, validator=_validate_longitude)
    latitude: float = attrs.field(converter=float, validator=_validate_latitude)

    def distance_km(self, other: 'GeoLocation') -> float:
        """Great-circle distance (haversine)."""
        lng1, lat1, lng2, lat2 = map(
            radians, (self.longitude, self.latitude, other.longitude, other.latitude)
        )
        a = sin((lat2 - lat1) / 2) ** 2 + cos(lat1) * cos(lat2) * sin((lng2 - lng1) / 2) ** 2
        return 2 * EARTH_RADIUS_KM * asin(sqrt(a))

    def bounding_box(self, radius_km: float) -> tuple[float, float, float, float]:
        """(min_lng, min_lat, max_lng, max_lat) enclosing the radius; used as a SQL prefilter."""
        lat_delta = radius_km / 111.0
        lng_delta = radius_km / max(111.0 * cos(radians(self.latitude)), 1e-6)
        return (
            self.longitude - lng_delta,
            self.latitude - lat_delta,
            self.longitude + lng_delta,
            self.latitude + lat_delta,
        )
