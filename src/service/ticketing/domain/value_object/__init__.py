"""Ticketing Domain Value Objects"""

from src.service.ticketing.domain.value_object.geo_location import GeoLocation
from src.service.ticketing.domain.value_object.seating_config import RowRange, SeatingConfig
from src.service.ticketing.domain.value_object.user_info import UserInfo

__all__ = ['GeoLocation', 'RowRange', 'SeatingConfig', 'UserInfo']
