# ABOUTME: Tests for the Victorian spot table
# ABOUTME: Validates spot lookup and which spots have tide station offsets

import pytest

from surfcast.errors import UnknownSpotError
from surfcast.spots import SPOTS, TIDE_LOCATION_OFFSETS, get_spot


def test_get_spot_by_id():
    spot = get_spot(4)
    assert spot.name == "Winkipop"
    assert spot.region == "Surf Coast"


def test_unknown_spot_raises():
    with pytest.raises(UnknownSpotError):
        get_spot(404)


def test_surf_coast_spots_share_torquay_station():
    for spot_id in (1, 2, 3, 4):
        assert get_spot(spot_id).tide_station == "IDV60801.94806"


def test_offsets_only_for_mapped_spots():
    assert set(TIDE_LOCATION_OFFSETS) == {1, 2, 3, 4, 5, 6}
    assert 7 not in TIDE_LOCATION_OFFSETS
    assert 8 not in TIDE_LOCATION_OFFSETS


def test_every_spot_has_valid_optimal_tide():
    for spot in SPOTS.values():
        assert spot.optimal_tide in ("low", "mid", "high")
