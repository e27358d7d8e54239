"""Data models for the cars API."""

from pycars.models._base import CarsBaseModel
from pycars.models.car import Car
from pycars.models.draft import DRAFT_FIELDS, CarDraft, ImageFile
from pycars.models.user import User

__all__ = [
    "Car",
    "CarDraft",
    "CarsBaseModel",
    "DRAFT_FIELDS",
    "ImageFile",
    "User",
]
