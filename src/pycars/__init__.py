"""pycars - Async Python client for managing a user's car listings."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pycars")
except PackageNotFoundError:
    __version__ = "0+local"
from pycars.client import CarsClient
from pycars.config import CarsConfig
from pycars.exceptions import (
    CarDraftError,
    CarsApiError,
    CarsAuthenticationError,
    CarsConfigError,
    CarsError,
    CarsNotFoundError,
    CarsTransportError,
    CarsValidationError,
)
from pycars.models import Car, CarDraft, ImageFile, User
from pycars.session import Session
from pycars.state import CarForm, CarListStore, CarsPage, FormMode, render_page

__all__ = [
    "__version__",
    "Car",
    "CarDraft",
    "CarDraftError",
    "CarForm",
    "CarListStore",
    "CarsApiError",
    "CarsAuthenticationError",
    "CarsClient",
    "CarsConfig",
    "CarsConfigError",
    "CarsError",
    "CarsNotFoundError",
    "CarsPage",
    "CarsTransportError",
    "CarsValidationError",
    "FormMode",
    "ImageFile",
    "Session",
    "User",
    "render_page",
]
