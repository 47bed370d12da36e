"""Tests for scroll handles and programmatic re-centering."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from zonepulse.app import ScrollCoordinator
from zonepulse.utils import generate_slots

REFERENCE = datetime(2024, 3, 10, 8, 15, tzinfo=timezone.utc)
ZONES = ("UTC", "Asia/Tokyo", "Mars/Jezero")


@pytest.fixture
def slots():
    return generate_slots(REFERENCE)


@pytest.fixture
def views(recording_view_factory):
    return {zone_id: recording_view_factory() for zone_id in ZONES}


@pytest.fixture
def coordinator(qapp, slots, views) -> ScrollCoordinator:
    coordinator = ScrollCoordinator(settle_ms=50)
    for zone_id, view in views.items():
        coordinator.register_zone(zone_id, view)
    coordinator.set_slots(slots)
    yield coordinator
    coordinator.dispose()


class TestSelection:

    def test_scrolls_every_idle_zone(self, coordinator, slots, views):
        moved = coordinator.on_selection_changed(slots[20])

        assert moved == list(ZONES)
        assert all(view.calls == [(20, "center")] for view in views.values())

    def test_user_active_zone_is_skipped(self, coordinator, slots, views):
        requested = []
        coordinator.scroll_requested.connect(lambda z, i, a: requested.append((z, i, a)))

        coordinator.on_user_scroll("Asia/Tokyo", 120.0)
        moved = coordinator.on_selection_changed(slots[20])

        assert "Asia/Tokyo" not in moved
        assert views["Asia/Tokyo"].calls == []
        assert views["UTC"].calls == [(20, "center")]
        assert views["Mars/Jezero"].calls == [(20, "center")]
        assert [z for z, _, _ in requested] == ["UTC", "Mars/Jezero"]

    def test_zone_rejoins_after_settling(self, coordinator, slots, views, qtbot):
        settled = []
        coordinator.zone_settled.connect(lambda z: settled.append(z))
        coordinator.on_user_scroll("UTC")
        assert coordinator.is_user_active("UTC")

        qtbot.waitUntil(lambda: not coordinator.is_user_active("UTC"), timeout=2000)
        coordinator.on_selection_changed(slots[3])

        assert settled == ["UTC"]
        assert views["UTC"].calls == [(3, "center")]

    def test_repeated_scrolls_extend_the_window(self, qapp, qtbot):
        coordinator = ScrollCoordinator(settle_ms=300)
        coordinator.register_zone("UTC")
        coordinator.on_user_scroll("UTC")
        qtbot.wait(200)
        coordinator.on_user_scroll("UTC")
        qtbot.wait(200)

        assert coordinator.is_user_active("UTC")
        coordinator.dispose()

    def test_inexact_selection_uses_containing_slot(self, coordinator, slots):
        assert coordinator.index_for(slots[20] + timedelta(minutes=10)) == 20

    def test_selection_outside_day_is_ignored(self, coordinator, views):
        assert coordinator.on_selection_changed(REFERENCE + timedelta(days=2)) == []
        assert coordinator.on_selection_changed(None) == []
        assert all(view.calls == [] for view in views.values())

    def test_start_alignment(self, qapp, slots, recording_view_factory):
        coordinator = ScrollCoordinator(alignment="start")
        view = recording_view_factory()
        coordinator.register_zone("UTC", view)
        coordinator.set_slots(slots)

        coordinator.on_selection_changed(slots[1])

        assert view.calls == [(1, "start")]


class TestRegistration:

    def test_unregister_cancels_pending_settle(self, coordinator, qtbot):
        settled = []
        coordinator.zone_settled.connect(lambda z: settled.append(z))
        handle = coordinator.handle("Mars/Jezero")
        coordinator.on_user_scroll("Mars/Jezero")
        assert handle.settle_pending

        coordinator.unregister_zone("Mars/Jezero")
        qtbot.wait(120)

        assert handle.disposed
        assert not handle.settle_pending
        assert settled == []
        assert "Mars/Jezero" not in coordinator.zone_ids

    def test_unknown_zone_operations_are_ignored(self, coordinator):
        coordinator.on_user_scroll("Europe/Nowhere")
        coordinator.unregister_zone("Europe/Nowhere")

        assert coordinator.zone_ids == list(ZONES)

    def test_register_twice_swaps_view(self, coordinator, recording_view_factory, slots):
        first = coordinator.handle("UTC")
        view = recording_view_factory()

        assert coordinator.register_zone("UTC", view) is first
        coordinator.on_selection_changed(slots[0])
        assert view.calls == [(0, "center")]

    def test_disposed_handle_ignores_requests(self, coordinator, recording_view_factory):
        handle = coordinator.handle("UTC")
        handle.dispose()
        handle.mark_user_active()
        handle.scroll_to(4, "center")

        assert not handle.user_active


class TestReferenceTick:

    def test_first_tick_centers_on_current_slot(self, coordinator, views):
        assert coordinator.on_reference_tick(REFERENCE) == list(ZONES)
        assert views["UTC"].calls == [(16, "center")]

    def test_ticks_within_a_slot_do_nothing(self, coordinator, views):
        coordinator.on_reference_tick(REFERENCE)
        assert coordinator.on_reference_tick(REFERENCE + timedelta(minutes=5)) == []
        assert views["UTC"].calls == [(16, "center")]

    def test_crossing_a_boundary_recenters(self, coordinator, views):
        coordinator.on_reference_tick(REFERENCE)
        coordinator.on_reference_tick(REFERENCE + timedelta(minutes=15))

        assert views["UTC"].calls == [(16, "center"), (17, "center")]

    def test_active_highlight_suppresses_tracking(self, coordinator, views):
        coordinator.set_highlight_active(True)

        assert coordinator.on_reference_tick(REFERENCE) == []
        assert views["UTC"].calls == []

    def test_user_active_zone_is_not_tracked(self, coordinator, views):
        coordinator.on_user_scroll("UTC")

        moved = coordinator.on_reference_tick(REFERENCE)

        assert "UTC" not in moved
        assert views["UTC"].calls == []


class TestSearch:

    def test_search_scrolls_to_first_match(self, coordinator, views):
        coordinator.on_search("14:30")
        assert views["UTC"].calls == [(29, "center")]

    def test_unmatched_search_returns_to_current(self, coordinator, views):
        coordinator.set_highlight_active(True)
        coordinator.on_reference_tick(REFERENCE)

        coordinator.on_search("nothing")

        assert views["UTC"].calls == [(16, "center")]

    def test_search_without_reference_does_nothing(self, coordinator):
        assert coordinator.on_search("") == []


class TestFallBackDay:

    @pytest.fixture
    def new_york(self, qapp, recording_view_factory):
        coordinator = ScrollCoordinator(reference_zone="America/New_York")
        view = recording_view_factory()
        coordinator.register_zone("America/New_York", view)
        coordinator.set_slots(generate_slots(datetime(2024, 11, 3, 12, tzinfo=timezone.utc), 30, 48, "America/New_York"))
        yield coordinator, view
        coordinator.dispose()

    def test_late_evening_tracks_last_slot(self, new_york):
        coordinator, view = new_york
        late = datetime(2024, 11, 4, 4, 15, tzinfo=timezone.utc)  # 23:15 EST on Nov 3

        coordinator.on_reference_tick(late)

        assert view.calls == [(47, "center")]
        assert coordinator.index_for(late) == 47

    def test_selection_on_next_day_is_ignored(self, new_york):
        coordinator, view = new_york

        assert coordinator.on_selection_changed(datetime(2024, 11, 4, 5, 15, tzinfo=timezone.utc)) == []
        assert view.calls == []
