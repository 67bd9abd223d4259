import pytest

from errors import ConfigurationError
from models import ServiceItem
from service_selection import (
    PhotoItemClass,
    ServiceSelection,
    classify_photo_item,
    expand_bundle,
    is_excluded,
    lookup_service_item,
    resolve_services,
)
from tests.campaign_test_base import (
    DRONE,
    DUSK,
    MEDIUM_FLOORPLAN,
    PHOTOS_10,
    PHOTOS_20,
    PROPERTY_VIDEO,
    SMALL_FLOORPLAN,
    STORYTELLING_VIDEO,
    build_marketing,
)


class TestLookup:
    def test_known_item(self):
        assert lookup_service_item(PHOTOS_10) == ServiceItem(PHOTOS_10, 1.5)
        assert lookup_service_item(SMALL_FLOORPLAN).duration_hours == 0.75

    def test_unknown_item(self):
        with pytest.raises(ConfigurationError):
            lookup_service_item("Melo - Hologram Tour")


class TestClassification:
    def test_dusk_is_not_generic_photography(self):
        assert classify_photo_item(DUSK) is PhotoItemClass.DUSK

    def test_drone(self):
        assert classify_photo_item(DRONE) is PhotoItemClass.DRONE

    def test_photography(self):
        assert classify_photo_item(PHOTOS_20) is PhotoItemClass.PHOTOGRAPHY

    def test_everything_else_is_unclassified(self):
        assert classify_photo_item("Melo - Copywriting") is PhotoItemClass.UNCLASSIFIED
        assert classify_photo_item("") is PhotoItemClass.UNCLASSIFIED

    def test_virtual_and_redraw_are_excluded(self):
        assert is_excluded("Melo - Virtual Furniture Staging")
        assert is_excluded("Melo - Floor Plan Redraw")
        assert not is_excluded(PHOTOS_10)


class TestResolveServices:
    def test_nothing_selected(self):
        selection = resolve_services(build_marketing())
        assert selection == ServiceSelection()

    def test_photos_category_fills_each_slot(self):
        selection = resolve_services(build_marketing(photos=[PHOTOS_10, DUSK, DRONE]))
        assert selection.photography.name == PHOTOS_10
        assert selection.dusk.name == DUSK
        assert selection.drone.name == DRONE
        assert selection.video is None
        assert selection.floorplan is None

    def test_unclassified_photo_items_are_dropped(self):
        # Not in the catalog either, so a lookup would have raised
        selection = resolve_services(build_marketing(photos=["Melo - Copywriting", PHOTOS_10]))
        assert selection.photography.name == PHOTOS_10
        assert selection.dusk is None
        assert selection.drone is None

    def test_first_checked_photography_wins(self):
        selection = resolve_services(build_marketing(photos=[PHOTOS_10, PHOTOS_20]))
        assert selection.photography.name == PHOTOS_10

    def test_first_checked_video_wins(self):
        selection = resolve_services(build_marketing(video=[STORYTELLING_VIDEO, PROPERTY_VIDEO]))
        assert selection.video == ServiceItem(STORYTELLING_VIDEO, 2.0)

    def test_unchecked_items_are_ignored(self):
        marketing = build_marketing(
            floorplans=[SMALL_FLOORPLAN],
            unchecked={"Floorplans": [MEDIUM_FLOORPLAN], "Video": [PROPERTY_VIDEO]},
        )
        selection = resolve_services(marketing)
        assert selection.floorplan.name == SMALL_FLOORPLAN
        assert selection.video is None

    def test_excluded_items_skipped_even_when_checked(self):
        marketing = build_marketing(
            video=["Melo - Virtual Tour Video"],
            floorplans=["Melo - Floor Plan Redraw", MEDIUM_FLOORPLAN],
        )
        selection = resolve_services(marketing)
        assert selection.video is None
        assert selection.floorplan.name == MEDIUM_FLOORPLAN

    def test_unknown_video_is_a_configuration_error(self):
        with pytest.raises(ConfigurationError):
            resolve_services(build_marketing(video=["Melo - Cinema Trailer"]))


class TestBundles:
    def test_bundle_overrides_individual_items(self):
        marketing = build_marketing(
            photos=[PHOTOS_20, DRONE],
            video=[STORYTELLING_VIDEO],
            packages=["Essentials Package"],
        )
        selection = resolve_services(marketing)
        assert selection.photography.name == PHOTOS_10
        assert selection.floorplan.name == SMALL_FLOORPLAN
        assert selection.drone is None
        assert selection.video is None

    def test_bundle_expansion_is_fixed(self):
        selection = expand_bundle("Prestige Package")
        assert selection.photography.name == PHOTOS_20
        assert selection.dusk.name == DUSK
        assert selection.drone.name == DRONE
        assert selection.video.name == STORYTELLING_VIDEO
        assert selection.floorplan.name == "Melo - Large Floor Plan"

    def test_unknown_bundle(self):
        with pytest.raises(ConfigurationError):
            resolve_services(build_marketing(packages=["Platinum Package"]))
