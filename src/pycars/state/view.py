"""Plain-text rendering of the cars page."""

from __future__ import annotations

from pycars.state.page import CarsPage


def render_page(page: CarsPage, base_url: str) -> str:
    """Render heading, form and list the way the page lays them out."""
    draft = page.form.draft
    lines = [page.heading, "", page.form.title]
    lines.append(f"  Make:  {draft.make}")
    lines.append(f"  Model: {draft.model}")
    lines.append(f"  Year:  {draft.year}")
    lines.append(f"  Price: {draft.price}")
    lines.append(f"  Image: {draft.image.filename if draft.image is not None else '-'}")
    buttons = f"  [{page.form.submit_label}]"
    if page.form.can_cancel:
        buttons += "  [Cancel]"
    lines.append(buttons)

    lines.extend(["", "Your Cars"])
    if not len(page.cars):
        lines.append("No cars found.")
    for car in page.cars:
        lines.append(f"  #{car.id} {car.describe()}")
        url = car.image_url(base_url)
        if url is not None:
            lines.append(f"      {url}")
    return "\n".join(lines)
