"""Presentation/state layer.

Holds the user's car list and the car form, and maps UI events to
calls on the data-access client. Local state changes only after the
server confirms a mutation.
"""

from pycars.state.form import CarForm, FormMode
from pycars.state.page import CarsApi, CarsPage
from pycars.state.store import CarListStore
from pycars.state.view import render_page

__all__ = [
    "CarForm",
    "CarListStore",
    "CarsApi",
    "CarsPage",
    "FormMode",
    "render_page",
]
