from __future__ import annotations

from notification_placer.geometry import Point, Size
from notification_placer.layout_cache import OVERFLOW_PADDING, LayoutCache


def test_overflowing_first_position_is_right_aligned_with_fixed_padding():
    logs = []
    cache = LayoutCache(log_fn=logs.append)

    geometry = cache.populate(Size(1920, 1080), Size(300, 80), Point(1900, 20), screen_width=1920)

    assert geometry.padding == OVERFLOW_PADDING == 16
    assert geometry.position == Point(1920 - 300 - 16, 20)
    assert any("Recalculating position" in line for line in logs)


def test_well_formed_first_position_keeps_observed_gap():
    cache = LayoutCache()

    geometry = cache.populate(Size(1920, 1080), Size(344, 96), Point(1560, 12), screen_width=1920)

    assert geometry.padding == 1920 - 1560 - 344
    assert geometry.position == Point(1560, 12)
    assert geometry.window_size == Size(1920, 1080)
    assert geometry.notif_size == Size(344, 96)


def test_exactly_flush_banner_is_not_treated_as_overflow():
    cache = LayoutCache()

    geometry = cache.populate(Size(1920, 1080), Size(300, 80), Point(1620, 20), screen_width=1920)

    assert geometry.padding == 0
    assert geometry.position == Point(1620, 20)


def test_cache_is_empty_or_complete():
    cache = LayoutCache()
    assert cache.geometry is None
    assert not cache.is_populated

    cache.populate(Size(1920, 1080), Size(300, 80), Point(1600, 20), screen_width=1920)

    assert cache.is_populated
    geometry = cache.geometry
    assert None not in (geometry.window_size, geometry.notif_size, geometry.position, geometry.padding)


def test_populated_cache_is_never_overwritten():
    cache = LayoutCache()
    first = cache.populate(Size(1920, 1080), Size(300, 80), Point(1600, 20), screen_width=1920)

    second = cache.populate(Size(800, 600), Size(100, 50), Point(10, 10), screen_width=800)

    assert second is first
    assert cache.geometry == first
