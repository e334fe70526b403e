"""Calendar bootstrap (import side-effect)."""
from .api import set_calendar
from .bootstrap import build_calendar

set_calendar(build_calendar())
