from enum import StrEnum


class UserRole(StrEnum):
    ADMIN = 'admin'
    ORGANIZER = 'organizer'
    USER = 'user'
