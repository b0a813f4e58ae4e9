"""
Event Status Enum - Domain Value Object

draft → published (publish), published → draft (unpublish),
cancelled / completed are terminal and set administratively.
"""

from enum import StrEnum


class EventStatus(StrEnum):
    DRAFT = 'draft'
    PUBLISHED = 'published'
    CANCELLED = 'cancelled'
    COMPLETED = 'completed'
