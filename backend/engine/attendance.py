import math
from dataclasses import dataclass
from fractions import Fraction
from typing import Any, Dict, Optional

DEFAULT_THRESHOLD = 75


@dataclass(frozen=True)
class AttendanceProjection:
    """Derived attendance figures for one course. ``None`` means not applicable."""

    attended: int
    current_percentage: Optional[float] = None
    max_additional_skips: Optional[int] = None
    classes_needed_to_recover: Optional[int] = None
    projected_percentage: Optional[float] = None

    @property
    def is_applicable(self) -> bool:
        return self.current_percentage is not None


class AttendanceCalculator:
    @staticmethod
    def compute_projection(
        conducted: int, absent: int, threshold: int = DEFAULT_THRESHOLD
    ) -> AttendanceProjection:
        """
        Project attendance for a course from its conducted and absent counts.

        Skips are future classes counted as conducted but not attended;
        recovery classes are counted as both conducted and attended. Counts
        are taken as given: absent may exceed conducted, which yields a
        negative attended figure.
        """
        attended = conducted - absent

        if conducted == 0:
            return AttendanceProjection(attended=attended)

        ratio = Fraction(threshold, 100)
        current = Fraction(attended * 100, conducted)

        # attended / (conducted + s) >= ratio, solved for s
        skip_budget = (1 - ratio) * conducted - absent
        max_skips = 0 if skip_budget < 0 else math.floor(skip_budget / ratio)

        projected = Fraction(attended * 100, conducted + max_skips)

        # (attended + n) / (conducted + n) >= ratio, solved for n
        needed = 0
        if current < threshold:
            needed = max(0, math.ceil((ratio * conducted - attended) / (1 - ratio)))

        return AttendanceProjection(
            attended=attended,
            current_percentage=float(current),
            max_additional_skips=max_skips,
            classes_needed_to_recover=needed,
            projected_percentage=float(projected),
        )


compute_projection = AttendanceCalculator.compute_projection


def _format_percentage(value: Optional[float]) -> str:
    return "-" if value is None else f"{value:.2f}%"


def format_projection(projection: AttendanceProjection) -> Dict[str, Any]:
    """Render a projection the way the tracker displays it."""
    if not projection.is_applicable:
        return {
            "current": "-",
            "skips": "-",
            "projected": "-",
            "needed": "-",
            "status": "-",
        }

    needed = projection.classes_needed_to_recover
    skips = projection.max_additional_skips

    if needed > 0:
        status = f"Attend {needed} classes"
    else:
        status = f"Can skip {skips} classes"

    return {
        "current": _format_percentage(projection.current_percentage),
        "skips": skips,
        "projected": _format_percentage(projection.projected_percentage),
        "needed": needed,
        "status": status,
    }
