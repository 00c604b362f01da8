"""Time range value type shared by slots, bookings and meeting creation.

Every time string entering the system (booking form, admin slot editor) goes
through ``TimeRange.parse`` and is stored as its canonical ``label``, e.g.
``"09:00 AM – 10:00 AM"``. Comparing bookings against slots is therefore a
plain string equality on normalised values.
"""
import re
from dataclasses import dataclass
from datetime import datetime, time
from typing import Optional


DEFAULT_DURATION_MINUTES = 60
RANGE_DASH = "–"

# hyphen, en dash, em dash, minus sign, unicode hyphen, or the word "to"
_SEPARATOR = re.compile(r"\s*(?:[-‐–—−]|\s+to\s+)\s*", re.IGNORECASE)
_CLOCK_12H = re.compile(r"^(\d{1,2})(?::(\d{2}))?\s*([AP])\.?M\.?$", re.IGNORECASE)
_CLOCK_24H = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_clock(text: str) -> time:
    """Parse ``9am``, ``09:00 PM``, ``12:30 a.m.`` or ``14:00`` into a time."""
    cleaned = (text or "").strip()
    if not cleaned:
        raise ValueError("Empty time")

    match = _CLOCK_12H.match(cleaned)
    if match:
        hours = int(match.group(1))
        minutes = int(match.group(2) or 0)
        if not 1 <= hours <= 12 or minutes > 59:
            raise ValueError(f"Invalid time: {text!r}")
        if match.group(3).upper() == "P":
            hours = hours % 12 + 12
        else:
            hours = hours % 12
        return time(hours, minutes)

    match = _CLOCK_24H.match(cleaned)
    if match:
        hours, minutes = int(match.group(1)), int(match.group(2))
        if hours > 23 or minutes > 59:
            raise ValueError(f"Invalid time: {text!r}")
        return time(hours, minutes)

    raise ValueError(f"Cannot parse time: {text!r}")


def format_clock(value: time) -> str:
    return value.strftime("%I:%M %p")


@dataclass(frozen=True, order=True)
class TimeRange:
    start: time
    end: Optional[time] = None

    @classmethod
    def parse(cls, text: str) -> "TimeRange":
        if not text or not text.strip():
            raise ValueError("Time is required")
        parts = _SEPARATOR.split(text.strip(), maxsplit=1)
        start = parse_clock(parts[0])
        end = parse_clock(parts[1]) if len(parts) > 1 else None
        if end is not None and end <= start:
            raise ValueError(f"End time must be after start time: {text!r}")
        return cls(start, end)

    @property
    def label(self) -> str:
        if self.end is None:
            return format_clock(self.start)
        return f"{format_clock(self.start)} {RANGE_DASH} {format_clock(self.end)}"

    @property
    def duration_minutes(self) -> int:
        if self.end is None:
            return DEFAULT_DURATION_MINUTES
        return (self.end.hour * 60 + self.end.minute) - (self.start.hour * 60 + self.start.minute)

    def starts_on(self, day: str) -> datetime:
        """Naive local datetime of the range start on ``day`` (YYYY-MM-DD)."""
        return datetime.combine(datetime.strptime(day, "%Y-%m-%d").date(), self.start)

    def __str__(self):
        return self.label


def normalize_time_label(text: str) -> str:
    return TimeRange.parse(text).label


def slot_start(slot: dict) -> time:
    return TimeRange.parse(slot["time"]).start


def is_slot_in_past(label: str, day: str, now: datetime) -> bool:
    """True when the slot on ``day`` starts before ``now``."""
    selected = datetime.strptime(day, "%Y-%m-%d").date()
    today = now.date()
    if selected > today:
        return False
    if selected < today:
        return True
    return TimeRange.parse(label).start < now.time().replace(second=0, microsecond=0)


def filter_available_slots(slots, day: str, now: datetime):
    """Drop available slots that already started; booked/closed ones always stay."""
    return [
        slot for slot in slots
        if slot["status"] in ("booked", "closed") or not is_slot_in_past(slot["time"], day, now)
    ]
