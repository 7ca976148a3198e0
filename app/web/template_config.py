"""Jinja2 template configuration."""

from pathlib import Path

from fastapi.templating import Jinja2Templates

from app.services.formatting import (
    format_money,
    format_percentage,
    format_unit_price,
    format_units,
)

# Template directory is at app/templates/
BASE_DIR = Path(__file__).resolve().parent.parent
templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))

templates.env.filters["units"] = format_units
templates.env.filters["money"] = format_money
templates.env.filters["percentage"] = format_percentage
templates.env.filters["unit_price"] = format_unit_price
