from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any

import aiohttp
import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from pycars.client import CarsClient
from pycars.config import CarsConfig
from pycars.exceptions import CarsApiError, CarsAuthenticationError, CarsTransportError, CarsValidationError
from pycars.models.draft import CarDraft, ImageFile
from pycars.models.user import User
from pycars.session import Session

_CAR = {"id": 5, "make": "Toyota", "model": "Corolla", "year": 2020, "price": "15000.00", "image": None}


class _Recorder:
    def __init__(self) -> None:
        self.requests: list[dict[str, Any]] = []

    async def _record(self, request: web.Request) -> dict[str, Any]:
        entry: dict[str, Any] = {
            "method": request.method,
            "path": request.path,
            "authorization": request.headers.get("Authorization"),
            "content_type": request.content_type,
            "fields": {},
            "files": {},
        }
        if request.content_type == "multipart/form-data":
            form = await request.post()
            for name, value in form.items():
                if isinstance(value, web.FileField):
                    entry["files"][name] = (value.filename, value.content_type, value.file.read())
                else:
                    entry["fields"][name] = value
        self.requests.append(entry)
        return entry

    async def list_mine(self, request: web.Request) -> web.Response:
        entry = await self._record(request)
        if entry["authorization"] != "Bearer token-1":
            return web.json_response({"detail": "Authentication credentials were not provided."}, status=401)
        return web.json_response([_CAR])

    async def create(self, request: web.Request) -> web.Response:
        entry = await self._record(request)
        if not entry["fields"].get("make"):
            return web.json_response({"make": ["This field is required."]}, status=400)
        image = entry["files"].get("image")
        return web.json_response(
            {**_CAR, "id": 6, "image": f"/media/car_images/{image[0]}" if image else None},
            status=201,
        )

    async def update(self, request: web.Request) -> web.Response:
        entry = await self._record(request)
        return web.json_response({**_CAR, "id": int(request.match_info["car_id"]), "model": entry["fields"]["model"]})

    async def delete(self, request: web.Request) -> web.Response:
        await self._record(request)
        if request.match_info["car_id"] == "99":
            return web.Response(body=b"\xff\xfe gone", status=500, content_type="text/plain", charset="utf-8")
        return web.Response(status=204)


@pytest.fixture
def recorder() -> _Recorder:
    return _Recorder()


@pytest_asyncio.fixture
async def base_url(recorder: _Recorder) -> AsyncIterator[str]:
    app = web.Application()
    app.router.add_get("/api/cars/mine/", recorder.list_mine)
    app.router.add_post("/api/cars/mine/", recorder.create)
    app.router.add_put("/api/cars/{car_id}/", recorder.update)
    app.router.add_delete("/api/cars/{car_id}/", recorder.delete)
    server = TestServer(app)
    await server.start_server()
    try:
        yield f"http://{server.host}:{server.port}"
    finally:
        await server.close()


def _session(token: str = "token-1") -> Session:
    return Session(user=User(username="alice"), token=token)


def _draft(**overrides: Any) -> CarDraft:
    values = {"make": "Toyota", "model": "Corolla", "year": "2020", "price": "15000"}
    values.update(overrides)
    return CarDraft(**values)


@pytest.mark.asyncio
async def test_list_sends_bearer_token(base_url: str, recorder: _Recorder) -> None:
    async with CarsClient(CarsConfig(base_url=base_url)) as client:
        cars = await client.list_my_cars(_session())

    assert [car.id for car in cars] == [5]
    assert recorder.requests[0]["authorization"] == "Bearer token-1"


@pytest.mark.asyncio
async def test_create_sends_multipart_without_image_part(base_url: str, recorder: _Recorder) -> None:
    async with CarsClient(CarsConfig(base_url=base_url)) as client:
        car = await client.create_car(_session(), _draft())

    request = recorder.requests[0]
    assert request["content_type"] == "multipart/form-data"
    assert request["fields"] == {"make": "Toyota", "model": "Corolla", "year": "2020", "price": "15000"}
    assert request["files"] == {}
    assert car.id == 6
    assert car.image is None


@pytest.mark.asyncio
async def test_create_uploads_selected_image(base_url: str, recorder: _Recorder) -> None:
    image = ImageFile(filename="corolla.png", content=b"\x89PNG", content_type="image/png")

    async with CarsClient(CarsConfig(base_url=base_url)) as client:
        car = await client.create_car(_session(), _draft(image=image))
        url = client.image_url(car)

    assert recorder.requests[0]["files"] == {"image": ("corolla.png", "image/png", b"\x89PNG")}
    assert url == f"{base_url}/media/car_images/corolla.png"


@pytest.mark.asyncio
async def test_update_and_delete_address_the_car(base_url: str, recorder: _Recorder) -> None:
    async with CarsClient(CarsConfig(base_url=base_url)) as client:
        car = await client.update_car(_session(), 5, _draft(model="Civic"))
        await client.delete_car(_session(), 5)

    assert car.model == "Civic"
    assert [(r["method"], r["path"]) for r in recorder.requests] == [
        ("PUT", "/api/cars/5/"),
        ("DELETE", "/api/cars/5/"),
    ]


@pytest.mark.asyncio
async def test_error_statuses_carry_the_server_body(base_url: str) -> None:
    async with CarsClient(CarsConfig(base_url=base_url)) as client:
        with pytest.raises(CarsAuthenticationError) as auth_info:
            await client.list_my_cars(_session("expired"))
        with pytest.raises(CarsValidationError) as validation_info:
            await client.create_car(_session(), _draft(make=""))

    assert auth_info.value.status_code == 401
    assert auth_info.value.body == {"detail": "Authentication credentials were not provided."}
    assert validation_info.value.body == {"make": ["This field is required."]}


@pytest.mark.asyncio
async def test_connection_failure_raises_transport_error(unused_tcp_port: int) -> None:
    config = CarsConfig(base_url=f"http://127.0.0.1:{unused_tcp_port}", request_timeout=5)

    async with CarsClient(config) as client:
        with pytest.raises(CarsTransportError) as exc_info:
            await client.list_my_cars(_session())

    assert exc_info.value.endpoint == "/api/cars/mine/"


@pytest.mark.asyncio
async def test_external_http_session_is_left_open(base_url: str) -> None:
    async with aiohttp.ClientSession() as http_session:
        async with CarsClient(CarsConfig(base_url=base_url), http_session=http_session) as client:
            await client.list_my_cars(_session())
        assert not http_session.closed


@pytest.mark.asyncio
async def test_undecodable_error_body_still_maps_to_api_error(base_url: str) -> None:
    async with CarsClient(CarsConfig(base_url=base_url)) as client:
        with pytest.raises(CarsApiError) as exc_info:
            await client.delete_car(_session(), 99)

    assert exc_info.value.status_code == 500
    assert exc_info.value.body.endswith(" gone")
    assert "\ufffd" in exc_info.value.body
