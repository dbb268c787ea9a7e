"""
Tests for NutritionScheduler.

947 Ride Joburg at 3:45, standard strategy:
    fuel       15, 45, 75, 105, 135, 165, 195         (7, stops before 215)
    hydration  10, 30, ..., 210                       (11, stops before 220)
Mandela Bridge is reached at ~193.4 min, so only the 190 hydration sits
inside its 15-minute pre-hill window.
"""

import pytest

from app.features.pacing.calculators import (
    NUTRITION_STRATEGIES,
    NutritionScheduler,
    SplitCalculator,
    fuel_times,
    hydration_times,
)
from app.shared.constants import NutritionEventType, NutritionStrategyName


@pytest.fixture
def joburg_splits(joburg):
    return SplitCalculator(joburg).calculate(225)


def _schedule(course, splits, strategy, target=225):
    scheduler = NutritionScheduler(strategy, hill_warning_checkpoints=course.hill_warning_checkpoints)
    return scheduler.schedule(splits, target, start_time="06:00")


# =============================================================================
# Test timing helpers
# =============================================================================

class TestTimingHelpers:
    """Tests for fuel_times / hydration_times."""

    def test_fuel_times_standard(self):
        assert fuel_times(225, 30) == [15, 45, 75, 105, 135, 165, 195]

    def test_fuel_cutoff_is_strict(self):
        """A fuel tick exactly 10 minutes before the finish is dropped."""
        assert fuel_times(55, 30) == [15]

    def test_hydration_times(self):
        assert hydration_times(225) == [10, 30, 50, 70, 90, 110, 130, 150, 170, 190, 210]

    def test_hydration_cutoff_is_strict(self):
        assert hydration_times(35) == [10]

    def test_short_race_has_no_events(self):
        assert fuel_times(20, 30) == []
        assert hydration_times(15) == []


# =============================================================================
# Test strategies
# =============================================================================

class TestStrategies:
    """Dose arithmetic per preset."""

    @pytest.mark.parametrize("name,interval,dose", [
        (NutritionStrategyName.AGGRESSIVE, 20, 30),
        (NutritionStrategyName.STANDARD, 30, 30),
        (NutritionStrategyName.CONSERVATIVE, 45, 34),
    ])
    def test_dose(self, name, interval, dose):
        strategy = NUTRITION_STRATEGIES[name]
        assert strategy.fueling_interval_minutes == interval
        assert strategy.carbs_per_dose == dose

    def test_conservative_label_is_range(self):
        details = NUTRITION_STRATEGIES[NutritionStrategyName.CONSERVATIVE].fuel_details()
        assert details == "Take 34g carbs (45min interval, 40-50g carbs/hr)"

    def test_none_has_no_preset(self):
        assert NutritionStrategyName.NONE not in NUTRITION_STRATEGIES


# =============================================================================
# Test schedule
# =============================================================================

class TestSchedule:
    """947 Ride Joburg timetable."""

    def test_counts(self, joburg, joburg_splits):
        events = _schedule(joburg, joburg_splits, NutritionStrategyName.STANDARD)
        fuel = [e for e in events if e.type == NutritionEventType.FUEL]
        hydration = [e for e in events if e.type == NutritionEventType.HYDRATION]
        assert len(fuel) == 7
        assert len(hydration) == 11

    def test_first_fuel(self, joburg, joburg_splits):
        events = _schedule(joburg, joburg_splits, NutritionStrategyName.STANDARD)
        first_fuel = next(e for e in events if e.type == NutritionEventType.FUEL)
        assert first_fuel.time_minutes == 15
        assert first_fuel.time_of_day == "06:15"
        assert "30g" in first_fuel.details
        assert "30min" in first_fuel.details

    def test_first_event_is_hydration(self, joburg, joburg_splits):
        first = _schedule(joburg, joburg_splits, NutritionStrategyName.STANDARD)[0]
        assert first.type == NutritionEventType.HYDRATION
        assert first.time_minutes == 10
        assert first.details == "Drink 150-250ml with electrolytes"

    def test_strictly_increasing(self, joburg, joburg_splits):
        for strategy in (NutritionStrategyName.AGGRESSIVE, NutritionStrategyName.STANDARD,
                         NutritionStrategyName.CONSERVATIVE):
            times = [e.time_minutes for e in _schedule(joburg, joburg_splits, strategy)]
            assert all(b > a for a, b in zip(times, times[1:]))

    def test_events_inside_race(self, joburg, joburg_splits):
        for event in _schedule(joburg, joburg_splits, NutritionStrategyName.AGGRESSIVE):
            assert 0 < event.time_minutes < 225
            assert 0 < event.distance < 98

    def test_interpolated_distance(self, joburg, joburg_splits):
        events = _schedule(joburg, joburg_splits, NutritionStrategyName.STANDARD)
        first = events[0]
        m1 = joburg_splits[0]
        assert first.associated_checkpoint_name == m1.checkpoint_name
        assert first.distance == pytest.approx(10 / m1.split_time_minutes * 17)

    def test_event_on_later_segment(self, joburg, joburg_splits):
        events = _schedule(joburg, joburg_splits, NutritionStrategyName.STANDARD)
        fuel_75 = next(e for e in events if e.time_minutes == 75)
        assert fuel_75.associated_checkpoint_name == "Kyalami Entrance 44.2km"
        assert 17 < fuel_75.distance < 44.2

    def test_pre_hill_window(self, joburg, joburg_splits):
        events = _schedule(joburg, joburg_splits, NutritionStrategyName.STANDARD)
        flagged = [e for e in events if e.is_pre_hill_warning]
        assert [e.time_minutes for e in flagged] == [190]
        assert flagged[0].associated_checkpoint_name == "Mandela Bridge 84.2km"
        assert "Climb ahead at Mandela Bridge 84.2km" in flagged[0].details

    def test_pre_hill_bound_is_strict(self, course_factory):
        """An event exactly 15 minutes before the climb is not flagged."""
        course = course_factory([("Flat", 20, 1.0), ("Climb", 40, 1.0)], hill_warnings=["Climb"])
        splits = SplitCalculator(course).calculate(50)
        # Climb reached at 50; hydration at 30 (20 min out), 50 is past cutoff
        events = NutritionScheduler(
            NutritionStrategyName.STANDARD, course.hill_warning_checkpoints
        ).schedule(splits, 50, "06:00")
        assert not any(e.is_pre_hill_warning for e in events)

        splits = SplitCalculator(course).calculate(60)
        # Climb reached at 60; fuel 45 is exactly 15 min out, hydration 50 is 10 min out
        events = NutritionScheduler(
            NutritionStrategyName.STANDARD, course.hill_warning_checkpoints
        ).schedule(splits, 60, "06:00")
        flagged = {e.time_minutes: e.is_pre_hill_warning for e in events}
        assert flagged[45] is False
        assert flagged[50] is True

    def test_none_strategy(self, joburg, joburg_splits):
        assert _schedule(joburg, joburg_splits, NutritionStrategyName.NONE) == []

    def test_no_splits(self, joburg):
        assert _schedule(joburg, [], NutritionStrategyName.STANDARD) == []

    def test_conservative_merges_coinciding_tick(self, joburg, joburg_splits):
        """Fuel at 150 lands on a hydration tick and absorbs it."""
        events = _schedule(joburg, joburg_splits, NutritionStrategyName.CONSERVATIVE)
        at_150 = [e for e in events if e.time_minutes == 150]
        assert len(at_150) == 1
        assert at_150[0].type == NutritionEventType.FUEL
        assert at_150[0].details.startswith("Take 34g carbs")
        assert at_150[0].details.endswith("drink 150-250ml with electrolytes")
        assert len(events) == 5 + 11 - 1

    def test_events_past_last_split_dropped(self, joburg):
        """Ticks beyond the final checkpoint have no enclosing split."""
        splits = SplitCalculator(joburg).calculate(60)
        events = _schedule(joburg, splits, NutritionStrategyName.STANDARD, target=225)

        assert [e.time_minutes for e in events] == [10, 15, 30, 45, 50]
        assert all(e.time_minutes <= splits[-1].cumulative_time_minutes for e in events)
        attached = NutritionScheduler.attach(splits, events)
        assert [e for s in attached for e in s.nutrition_events] == events


# =============================================================================
# Test attach
# =============================================================================

class TestAttach:
    """Tests for NutritionScheduler.attach."""

    def test_grouping_by_segment(self, joburg, joburg_splits):
        events = _schedule(joburg, joburg_splits, NutritionStrategyName.STANDARD)
        attached = NutritionScheduler.attach(joburg_splits, events)
        assert [len(s.nutrition_events) for s in attached] == [3, 4, 0, 9, 2]

    def test_every_event_attached_once(self, joburg, joburg_splits):
        events = _schedule(joburg, joburg_splits, NutritionStrategyName.AGGRESSIVE)
        attached = NutritionScheduler.attach(joburg_splits, events)
        flattened = [e for s in attached for e in s.nutrition_events]
        assert flattened == events

    def test_original_splits_untouched(self, joburg, joburg_splits):
        events = _schedule(joburg, joburg_splits, NutritionStrategyName.STANDARD)
        NutritionScheduler.attach(joburg_splits, events)
        assert all(s.nutrition_events == () for s in joburg_splits)
