# SPDX-License-Identifier: Apache-2.0

"""
Colombian public holidays (festivos) for the supported calendar window.

Easter-relative holidays and the holidays moved to Monday by Ley 51 de 1983
("Ley Emiliani") are stored already resolved to concrete dates. Dates outside
HOLIDAY_YEARS are never treated as holidays.
"""

from datetime import date, datetime
from typing import List, Tuple, Union

HOLIDAY_YEARS: Tuple[int, int] = (2024, 2026)

_FESTIVOS = (
    # 2024
    "2024-01-01", "2024-01-08", "2024-03-25", "2024-03-28", "2024-03-29",
    "2024-05-01", "2024-05-13", "2024-06-03", "2024-06-10", "2024-07-01",
    "2024-07-20", "2024-08-07", "2024-08-19", "2024-10-14", "2024-11-04",
    "2024-11-11", "2024-12-08", "2024-12-25",
    # 2025
    "2025-01-01", "2025-01-06", "2025-03-24", "2025-04-17", "2025-04-18",
    "2025-05-01", "2025-06-02", "2025-06-23", "2025-06-30",
    "2025-07-20", "2025-08-07", "2025-08-18", "2025-10-13", "2025-11-03",
    "2025-11-17", "2025-12-08", "2025-12-25",
    # 2026
    "2026-01-01", "2026-01-12", "2026-03-23", "2026-04-02", "2026-04-03",
    "2026-05-01", "2026-05-18", "2026-06-08", "2026-06-15", "2026-06-29",
    "2026-07-20", "2026-08-07", "2026-08-17", "2026-10-12", "2026-11-02",
    "2026-11-16", "2026-12-08", "2026-12-25",
)

FESTIVOS_COLOMBIA = frozenset(date.fromisoformat(fecha) for fecha in _FESTIVOS)


def _as_date(fecha: Union[date, datetime]) -> date:
    # Anchored datetimes are UTC; their calendar day is the UTC day.
    if isinstance(fecha, datetime):
        return fecha.date()
    return fecha


def is_holiday(fecha: Union[date, datetime]) -> bool:
    """Check whether a date is a listed Colombian holiday."""
    return _as_date(fecha) in FESTIVOS_COLOMBIA


def holidays_in_year(year: int) -> List[date]:
    """Return the sorted holidays of a year (empty outside HOLIDAY_YEARS)."""
    first, last = HOLIDAY_YEARS
    if not first <= year <= last:
        return []
    return sorted(fecha for fecha in FESTIVOS_COLOMBIA if fecha.year == year)
