from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Portal account type used for access checks."""

    ADMIN = "admin"
    CLIENT = "client"


class Audience(str, Enum):
    """Who a compliance notification is shown to."""

    ADMIN = "ADMIN"
    CLIENT = "CLIENT"


class NotificationKind(str, Enum):
    EXPIRY_30_DAYS = "EXPIRY_30_DAYS"
    EXPIRY_7_DAYS = "EXPIRY_7_DAYS"
    EXPIRY_1_DAY = "EXPIRY_1_DAY"
    EXPIRED = "EXPIRED"


class ScheduleCategory(str, Enum):
    """Recurring compliance item families with their own template sets."""

    TRAINING = "TRAINING"
    COMMITTEE = "COMMITTEE"


class TrainingMode(str, Enum):
    REFERENCE = "reference"
    FUTURE = "future"


class EventType(str, Enum):
    TRAINING = "Training"
    COMMITTEE_MEETING = "Committee Meeting"
