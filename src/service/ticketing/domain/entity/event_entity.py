from datetime import datetime
from typing import List, Optional

import attrs

from src.service.ticketing.domain.enum.event_status import EventStatus
from src.service.ticketing.domain.value_object.geo_location import GeoLocation


def _validate_non_empty_string(instance: object, attribute: attrs.Attribute, value: str) -> None:
    if not value or not value.strip():
        raise ValueError(f'Event {attribute.name} cannot be empty')


@attrs.define
class Event:
    """Descriptive part of the event aggregate (everything that is not inventory)."""

    title: str = attrs.field(validator=_validate_non_empty_string)
    created_by: str
    start_date: datetime
    end_date: datetime
    id: str = ''
    short_description: str = ''
    description: str = ''
    category: str = ''
    tags: List[str] = attrs.field(factory=list)
    event_type: str = ''
    mode: str = 'offline'
    language: str = ''
    registration_deadline: Optional[datetime] = None
    venue_name: str = ''
    address: str = ''
    city: str = ''
    state: str = ''
    country: str = ''
    pin_code: str = ''
    geo_location: Optional[GeoLocation] = None
    banner_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    gallery_urls: List[str] = attrs.field(factory=list)
    is_featured: bool = False
    age_restriction: Optional[int] = None
    status: EventStatus = attrs.field(default=EventStatus.DRAFT, converter=EventStatus)
    is_published: bool = False
    published_at: Optional[datetime] = None
    updated_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def date_errors(self) -> List[str]:
        errors = []
        if self.end_date < self.start_date:
            errors.append('endDate must not be before startDate')
        if self.registration_deadline and self.registration_deadline > self.start_date:
            errors.append('registrationDeadline must not be after startDate')
        return errors
