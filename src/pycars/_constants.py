"""Internal constants shared across the library."""

BASE_URL = "http://127.0.0.1:8000"
USER_AGENT = "pycars/1.0"

MY_CARS_ENDPOINT = "/api/cars/mine/"

# ------------------------------------------------------------------
# User-facing alert messages for failed mutations
# ------------------------------------------------------------------

CREATE_FAILED_MESSAGE = "Failed to create car."
UPDATE_FAILED_MESSAGE = "Failed to update car."
DELETE_FAILED_MESSAGE = "Failed to delete car."


def car_endpoint(car_id: int | str) -> str:
    """Resource path of a single car (trailing slash required by the API)."""
    return f"/api/cars/{car_id}/"
