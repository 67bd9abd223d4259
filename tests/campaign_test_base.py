"""
Shared fixtures for campaign scheduler tests.

Everything runs against a fixed "now" (Monday 2024-03-04 09:15 Sydney) so
expected timestamps are exact. Sydney daylight saving ends on 2024-04-07,
which falls inside a four-week campaign from that date.
"""

from datetime import datetime, date
from typing import Dict, Iterable, Tuple

import pytz

from models import (
    CampaignParameters,
    Contractor,
    DayAvailability,
    Event,
    MarketingCategory,
    MarketingConfig,
    MarketingItem,
)

TZ_NAME = "Australia/Sydney"
TZ = pytz.timezone(TZ_NAME)
NOW = TZ.localize(datetime(2024, 3, 4, 9, 15))

PHOTOS_10 = "Melo Photography - Photography 10 Images"
PHOTOS_20 = "Melo Photography - Photography 20 Images"
DUSK = "Melo Photography - Dusk Photography"
DRONE = "Melo Photography - Drone Shots"
PROPERTY_VIDEO = "Melo - Property Video"
STORYTELLING_VIDEO = "Melo - Storytelling Videos"
SMALL_FLOORPLAN = "Melo - Small Floor Plan"
MEDIUM_FLOORPLAN = "Melo - Medium Floor Plan"


def local(year: int, month: int, day: int, hour: int = 0, minute: int = 0) -> datetime:
    return TZ.localize(datetime(year, month, day, hour, minute))


def build_marketing(
    photos: Iterable[str] = (),
    video: Iterable[str] = (),
    floorplans: Iterable[str] = (),
    packages: Iterable[str] = (),
    unchecked: Dict[str, Iterable[str]] = None,
) -> MarketingConfig:
    """Marketing config with the given items ticked."""
    unchecked = unchecked or {}
    categories = []
    for name, items in (
        ("Photos", photos),
        ("Video", video),
        ("Floorplans", floorplans),
        ("Packages", packages),
    ):
        category_items = [MarketingItem(name=item, is_checked=False) for item in unchecked.get(name, ())]
        category_items += [MarketingItem(name=item, is_checked=True) for item in items]
        categories.append(MarketingCategory(category=name, items=category_items))
    return MarketingConfig(categories=categories)


def build_params(**overrides) -> CampaignParameters:
    values = {
        "prepare_marketing": "ASAP",
        "conclusion_date": "4 weeks",
        "sale_process": "Private Treaty",
        "finishes": "",
        "has_water_views": False,
        "address": "12 Harbour St, Mosman NSW",
    }
    values.update(overrides)
    return CampaignParameters(**values)


def build_contractor(
    contractor_id: str,
    services: Iterable[str],
    days: Dict[str, Tuple[str, str]],
    name: str = None,
) -> Contractor:
    """Contractor available on `days` ({"TUE": ("06:00", "20:00")})."""
    return Contractor(
        id=contractor_id,
        name=name or f"Contractor {contractor_id}",
        mobile="0400 000 000",
        email=f"{contractor_id}@example.com",
        services=list(services),
        availability={
            code: DayAvailability(available=True, start_time=start, end_time=end)
            for code, (start, end) in days.items()
        },
    )


def as_rows(events: Iterable[Event]):
    """(summary, start, end) with ISO timestamps, for compact assertions."""
    return [
        (e.summary, e.start.isoformat(), e.end.isoformat() if e.end is not None else None)
        for e in events
    ]


class BaseCampaignTest:
    """Common setup for campaign scheduling tests."""

    def setup_method(self, method):
        self.tz = TZ
        self.tz_name = TZ_NAME
        self.now = NOW
        self.launch_monday = date(2024, 3, 11)
