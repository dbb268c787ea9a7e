"""Race course data models (immutable dataclasses, no I/O)."""

from __future__ import annotations

from dataclasses import dataclass, field

from .errors import InvalidCourseError

# Tolerance for "last checkpoint equals total distance"
DISTANCE_TOLERANCE_KM = 1e-6


@dataclass(frozen=True)
class Checkpoint:
    """A named distance marker with a terrain difficulty multiplier."""

    name: str  # "Mandela Bridge 84.2km"
    distance: float  # km, cumulative from race start
    terrain_factor: float  # >1 faster than average, <1 slower
    description: str = ""


@dataclass(frozen=True)
class PaceThresholds:
    """Course-specific finish-time bounds (minutes) for pace judgment."""

    min_minutes: float  # below this = elite professional pace
    elite_minutes: float  # below this = very aggressive
    beginner_warning_minutes: float  # beginners below this get a warning


@dataclass(frozen=True)
class RaceCourse:
    """
    A fixed race route.

    Validated on construction: at least two checkpoints, strictly
    increasing distances starting above zero, positive terrain factors,
    and a final checkpoint sitting on the finish line.
    """

    id: str
    name: str
    total_distance: float  # km
    checkpoints: tuple[Checkpoint, ...]
    pace_validation: PaceThresholds
    hill_warning_checkpoints: frozenset[str] = field(default_factory=frozenset)
    short_name: str = ""
    location: str = ""
    latitude: float | None = None
    longitude: float | None = None
    default_start_time: str = "06:00"
    month: str = ""
    csv_filename_prefix: str = "race_splits"
    info_banner: str = ""
    regional_context: str | None = None

    def __post_init__(self) -> None:
        # Accept lists from loaders, store tuples/frozensets
        object.__setattr__(self, "checkpoints", tuple(self.checkpoints))
        object.__setattr__(
            self, "hill_warning_checkpoints", frozenset(self.hill_warning_checkpoints)
        )
        self._validate()

    def _validate(self) -> None:
        if self.total_distance <= 0:
            raise InvalidCourseError(f"{self.id}: total distance must be positive")

        if len(self.checkpoints) < 2:
            raise InvalidCourseError(
                f"{self.id}: at least two checkpoints are required, "
                f"got {len(self.checkpoints)}"
            )

        prev_distance = 0.0
        for cp in self.checkpoints:
            if cp.terrain_factor <= 0:
                raise InvalidCourseError(
                    f"{self.id}: terrain factor of '{cp.name}' must be > 0"
                )
            if cp.distance <= prev_distance:
                raise InvalidCourseError(
                    f"{self.id}: '{cp.name}' at {cp.distance}km does not advance "
                    f"past {prev_distance}km (zero-length segment)"
                )
            prev_distance = cp.distance

        if abs(self.checkpoints[-1].distance - self.total_distance) > DISTANCE_TOLERANCE_KM:
            raise InvalidCourseError(
                f"{self.id}: last checkpoint at {self.checkpoints[-1].distance}km "
                f"but total distance is {self.total_distance}km"
            )

        names = {cp.name for cp in self.checkpoints}
        unknown = self.hill_warning_checkpoints - names
        if unknown:
            raise InvalidCourseError(
                f"{self.id}: unknown hill warning checkpoints: {sorted(unknown)}"
            )

    def csv_filename(self, target_hours: int, target_minutes: int) -> str:
        """Download name, e.g. '947_ride_joburg_splits_3h45m.csv'."""
        return f"{self.csv_filename_prefix}_{target_hours}h{target_minutes}m.csv"
