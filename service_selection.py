"""
Turns a property's marketing selection into concrete service items.

A checked bundle under the "Packages" category is authoritative and
replaces whatever else is ticked. Without a bundle, each category is read
on its own: Photos fills the photography / dusk / drone slots, Video and
Floorplans give at most one item each.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, List

from config import (
    EVENT_DURATIONS,
    BUNDLES,
    BUNDLE_CATEGORY,
    PHOTOS_CATEGORY,
    VIDEO_CATEGORY,
    FLOORPLAN_CATEGORY,
    EXCLUDED_ITEM_KEYWORDS,
)
from errors import ConfigurationError
from models import MarketingConfig, MarketingItem, ServiceItem

logger = logging.getLogger(__name__)


class PhotoItemClass(Enum):
    DUSK = "dusk"
    DRONE = "drone"
    PHOTOGRAPHY = "photography"
    UNCLASSIFIED = "unclassified"


@dataclass(frozen=True)
class ServiceSelection:
    photography: Optional[ServiceItem] = None
    dusk: Optional[ServiceItem] = None
    drone: Optional[ServiceItem] = None
    video: Optional[ServiceItem] = None
    floorplan: Optional[ServiceItem] = None


def lookup_service_item(name: str) -> ServiceItem:
    """
    Catalog lookup. An item we have no duration for can't be scheduled.
    """
    if name not in EVENT_DURATIONS:
        raise ConfigurationError(f"Unknown service item: {name!r}")
    return ServiceItem(name=name, duration_hours=float(EVENT_DURATIONS[name]))


def is_excluded(name: str) -> bool:
    lowered = (name or "").lower()
    return any(keyword in lowered for keyword in EXCLUDED_ITEM_KEYWORDS)


def classify_photo_item(name: str) -> PhotoItemClass:
    """
    Dusk and drone are checked before the generic "photography" match,
    since "Dusk Photography" would otherwise land in the photography slot.
    """
    lowered = (name or "").lower()
    if "dusk" in lowered:
        return PhotoItemClass.DUSK
    if "drone" in lowered:
        return PhotoItemClass.DRONE
    if "photography" in lowered:
        return PhotoItemClass.PHOTOGRAPHY
    return PhotoItemClass.UNCLASSIFIED


def get_selected_items(category_name: str, marketing: MarketingConfig) -> List[MarketingItem]:
    """Checked, non-excluded items of one category, in category order."""
    for category in marketing.categories:
        if category.category == category_name:
            return [
                item
                for item in category.items
                if item.is_checked and not is_excluded(item.name)
            ]
    return []


def expand_bundle(bundle_name: str) -> ServiceSelection:
    bundle = BUNDLES.get(bundle_name)
    if bundle is None:
        raise ConfigurationError(f"Unknown bundle: {bundle_name!r}")

    return ServiceSelection(
        **{slot: lookup_service_item(name) for slot, name in bundle.items()}
    )


def resolve_services(marketing: MarketingConfig) -> ServiceSelection:
    """
    Resolve a marketing selection into at most one item per slot.

    Bundle wins outright. Otherwise, first checked item wins in each slot,
    and Photos items that aren't dusk, drone or photography are dropped.
    """
    bundles = get_selected_items(BUNDLE_CATEGORY, marketing)
    if bundles:
        bundle_name = bundles[0].name
        logger.debug("Bundle %r selected; ignoring individual items", bundle_name)
        return expand_bundle(bundle_name)

    slots = {}
    for item in get_selected_items(PHOTOS_CATEGORY, marketing):
        item_class = classify_photo_item(item.name)
        if item_class is PhotoItemClass.UNCLASSIFIED:
            logger.debug("Dropping unclassified photo item %r", item.name)
            continue
        if item_class.value in slots:
            continue
        slots[item_class.value] = lookup_service_item(item.name)

    videos = get_selected_items(VIDEO_CATEGORY, marketing)
    if videos:
        slots["video"] = lookup_service_item(videos[0].name)

    floorplans = get_selected_items(FLOORPLAN_CATEGORY, marketing)
    if floorplans:
        slots["floorplan"] = lookup_service_item(floorplans[0].name)

    return ServiceSelection(**slots)
