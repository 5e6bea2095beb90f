from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Tuple

NUMERIC_FIELDS = ("conducted", "absent")
LABEL_FIELD = "course_label"

# Accepted spellings for each editable field, including the store's wire names
FIELD_ALIASES = {
    "course_label": LABEL_FIELD,
    "courseCode": LABEL_FIELD,
    "conducted": "conducted",
    "absent": "absent",
}


class RecordEditError(Exception):
    """Base class for rejected record edits."""

    pass


class UnknownFieldError(RecordEditError):
    """Raised when an edit names a field the record does not have."""

    pass


class InvalidFieldValueError(RecordEditError):
    """Raised when a count field is given a value that is not an integer."""

    pass


class RecordNotFoundError(RecordEditError):
    """Raised when an edit targets a record index outside the list."""

    pass


@dataclass
class CourseAttendanceRecord:
    course_label: str
    conducted: int = 0
    absent: int = 0

    def to_payload(self) -> Dict[str, Any]:
        return {
            "courseCode": self.course_label,
            "conducted": self.conducted,
            "absent": self.absent,
        }

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "CourseAttendanceRecord":
        return cls(
            course_label=str(payload["courseCode"]),
            conducted=max(0, parse_count(payload["conducted"])),
            absent=max(0, parse_count(payload["absent"])),
        )


# (course label, conducted, absent)
DEFAULT_RECORDS: Tuple[Tuple[str, int, int], ...] = (
    ("Service Oriented Architecture", 17, 1),
    ("Full Stack Web Development", 15, 1),
    ("Internet of Things", 15, 3),
    ("Wireless Sensor Networks", 15, 3),
    ("Semiconductor Packaging Technologies", 17, 3),
    ("Behavioral Psychology", 15, 0),
)


def build_records(rows: Sequence[Tuple[str, int, int]]) -> List[CourseAttendanceRecord]:
    return [CourseAttendanceRecord(label, conducted, absent) for label, conducted, absent in rows]


def parse_count(raw_value: Any) -> int:
    """
    Parse a raw count into an integer.

    Accepts ints, integral floats and integral strings (surrounding
    whitespace ignored). Anything else raises InvalidFieldValueError.
    """
    if raw_value is None or isinstance(raw_value, bool):
        raise InvalidFieldValueError(f"Expected a whole number, got {raw_value!r}")

    if isinstance(raw_value, int):
        return raw_value

    if isinstance(raw_value, float):
        if not raw_value.is_integer():
            raise InvalidFieldValueError(f"Expected a whole number, got {raw_value!r}")
        return int(raw_value)

    if isinstance(raw_value, str):
        text = raw_value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            raise InvalidFieldValueError(f"Expected a whole number, got {raw_value!r}")
        if not number.is_integer():
            raise InvalidFieldValueError(f"Expected a whole number, got {raw_value!r}")
        return int(number)

    raise InvalidFieldValueError(f"Expected a whole number, got {raw_value!r}")


def _resolve_field(field: str) -> str:
    try:
        return FIELD_ALIASES[field]
    except KeyError:
        raise UnknownFieldError(f"Unknown field: '{field}'")


def set_field(record: CourseAttendanceRecord, field: str, raw_value: Any) -> None:
    """
    Assign a field from raw user input.

    Counts are parsed and clamped to a minimum of 0. On a rejected value
    the record is left untouched.
    """
    name = _resolve_field(field)

    if name == LABEL_FIELD:
        record.course_label = "" if raw_value is None else str(raw_value)
        return

    value = parse_count(raw_value)
    setattr(record, name, max(0, value))


def adjust_field(record: CourseAttendanceRecord, field: str, delta: int) -> None:
    name = _resolve_field(field)
    if name not in NUMERIC_FIELDS:
        raise UnknownFieldError(f"Field '{field}' cannot be adjusted")

    set_field(record, name, getattr(record, name) + parse_count(delta))

