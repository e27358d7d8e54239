#!/usr/bin/env python3
"""Manage your car listings from the command line.

Loads your cars, optionally creates, edits or deletes one, and prints
the page the same way the web view lays it out.

Usage
-----
Set environment variables and run::

    export CARS_TOKEN="eyJ..."
    export CARS_USERNAME="alice"
    python scripts/manage_cars.py list
    python scripts/manage_cars.py add --make Toyota --model Corolla --year 2020 --price 15000
    python scripts/manage_cars.py edit 5 --model Civic --image civic.jpg
    python scripts/manage_cars.py delete 5

``CARS_BASE_URL`` (default ``http://127.0.0.1:8000``) selects the API.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pycars import (  # noqa: E402
    CarDraftError,
    CarsClient,
    CarsConfig,
    CarsPage,
    ImageFile,
    Session,
    User,
    render_page,
)

_FIELDS = ("make", "model", "year", "price")


def _add_field_args(parser: argparse.ArgumentParser) -> None:
    for name in _FIELDS:
        parser.add_argument(f"--{name}", default=None)
    parser.add_argument("--image", type=Path, default=None, help="Image file to upload")


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="List, add, edit or delete your cars")
    parser.add_argument("--token", default=os.environ.get("CARS_TOKEN"), help="Bearer token (default: $CARS_TOKEN)")
    parser.add_argument(
        "--username",
        default=os.environ.get("CARS_USERNAME", "me"),
        help="Name shown in the heading (default: $CARS_USERNAME)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("list", help="Show your cars")
    _add_field_args(sub.add_parser("add", help="Create a car"))
    edit = sub.add_parser("edit", help="Update a car; omitted fields keep their value")
    edit.add_argument("car_id", type=int)
    _add_field_args(edit)
    delete = sub.add_parser("delete", help="Delete a car")
    delete.add_argument("car_id", type=int)
    return parser.parse_args()


def _apply_fields(page: CarsPage, args: argparse.Namespace) -> None:
    for name in _FIELDS:
        value = getattr(args, name)
        if value is not None:
            page.change_field(name, value)
    if args.image is not None:
        page.select_image([ImageFile.from_path(args.image)])


async def _run(args: argparse.Namespace) -> int:
    if not args.token:
        print("No token given; set CARS_TOKEN or pass --token", file=sys.stderr)
        return 2

    config = CarsConfig.from_env()
    session = Session(user=User(username=args.username), token=args.token)
    alerts: list[str] = []

    async with CarsClient(config) as client:
        page = CarsPage(client, on_alert=alerts.append)
        page.set_session(session)
        await page.wait_loaded()

        if args.command == "add":
            _apply_fields(page, args)
        elif args.command == "edit":
            car = page.cars.get(args.car_id)
            if car is None:
                print(f"Car {args.car_id} not found", file=sys.stderr)
                return 1
            page.begin_edit(car)
            _apply_fields(page, args)
        elif args.command == "delete":
            await page.delete(args.car_id)

        if args.command in ("add", "edit"):
            try:
                await page.submit()
            except CarDraftError as exc:
                print(f"Invalid input: {exc}", file=sys.stderr)
                return 2

        print(render_page(page, config.base_url))
        await page.aclose()

    for message in alerts:
        print(message, file=sys.stderr)
    return 1 if alerts else 0


def main() -> int:
    args = _parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    return asyncio.run(_run(args))


if __name__ == "__main__":
    raise SystemExit(main())
