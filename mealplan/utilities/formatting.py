"""Small display helpers for the weekly grid and recipe cards."""
import math
from datetime import date, datetime, timedelta
from typing import Union

from mealplan.utilities.constants import DATE_FORMAT

DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]


def format_cooking_time(minutes: Union[int, float]) -> str:
    """Render a duration as '45 min', '2 hr' or '1 hr 30 min'."""
    if minutes < 60:
        return f"{minutes} min"
    hours = int(minutes // 60)
    remaining = minutes % 60
    if remaining == 0:
        return f"{hours} hr"
    return f"{hours} hr {remaining} min"


def get_day_name(day_index: Union[int, float]) -> str:
    """Weekday name for an index where 0 is Sunday; floored and clamped to 0..6."""
    if isinstance(day_index, float) and math.isnan(day_index):
        raise ValueError("day_index must be a number")
    clamped = max(0, min(6, day_index))
    return DAY_NAMES[int(math.floor(clamped))]


def get_week_start(day: Union[date, datetime]) -> Union[date, datetime]:
    """Return the Sunday that starts the week containing `day` (time of day preserved)."""
    # date.weekday(): Monday=0 .. Sunday=6
    offset = (day.weekday() + 1) % 7
    return day - timedelta(days=offset)


def format_date(day: Union[date, datetime]) -> str:
    return day.strftime(DATE_FORMAT)


def week_dates(week_start: Union[date, datetime]):
    """The seven ISO date strings of the week beginning at `week_start`."""
    return [format_date(week_start + timedelta(days=i)) for i in range(7)]


def parse_date(value: str) -> date:
    return datetime.strptime(value, DATE_FORMAT).date()


def format_quantity(quantity, unit: str) -> str:
    '''Shopping list line text, e.g. "1.5 cups". Whole floats drop the trailing ".0".'''
    if isinstance(quantity, float) and quantity.is_integer():
        quantity = int(quantity)
    return f"{quantity} {unit}".strip()
