"""Enumerations shared by the ORM models, schemas and services."""

from enum import Enum


class TicketType(str, Enum):
    DAY_PASS = "DayPass"
    WEEKEND_PASS = "WeekendPass"
    ANNUAL_PASS = "AnnualPass"
    MONTHLY_PASS = "MonthlyPass"
    ESCAPE_GAME = "EscapeGame"


class JobTitle(str, Enum):
    RECEPTIONIST = "Receptionist"
    CARETAKER = "Caretaker"
    CLEANER = "Cleaner"
    VENDOR = "Vendor"
    KEEPER = "Keeper"
    VETERINARIAN = "Veterinarian"
    REGISTRAR = "Registrar"
    DIRECTOR = "Director"
    MANAGER = "Manager"


class SpaceType(str, Enum):
    INDOOR = "Indoor"
    OUTDOOR = "Outdoor"


class SpaceSize(str, Enum):
    SMALL = "S"
    MEDIUM = "M"
    LARGE = "L"
    EXTRA_LARGE = "XL"
    EXTRA_EXTRA_LARGE = "XXL"


class EventType(str, Enum):
    """Gate crossing kinds recorded in the state cache buckets."""

    ENTRY = "ENTRY"
    EXIT = "EXIT"


class SpaceLogType(str, Enum):
    INFO = "Info"
    ACCIDENT = "Accident"
    MAINTENANCE = "Maintenance"
    ANIMAL = "Animal"
    OTHER = "Other"
