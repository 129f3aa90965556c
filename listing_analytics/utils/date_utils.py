"""Date manipulation utilities"""

from datetime import date
from typing import Optional


def current_year(today: Optional[date] = None) -> int:
    """Calendar year of `today` (default: the system date)"""
    return (today or date.today()).year


def property_age(year_built: int, as_of_year: int) -> int:
    """Age in whole years; never negative for properties built after as_of_year"""
    return max(as_of_year - year_built, 0)
