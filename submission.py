from __future__ import annotations

import enum
import json
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from typing import List, Optional

from booking_state import BookingFormState, FormField, FormValue, TemporalField
from errors import MissingRequiredField, SubmissionRejected

logger = logging.getLogger(__name__)
SINK_NAME = "booking.submission"
sink = logging.getLogger(SINK_NAME)

REQUIRED_LABELS = {
    FormField.TOWER: "Tower",
    FormField.TOWER_FLOOR: "Floor",
    FormField.MEETING_ROOM: "Meeting room",
    TemporalField.DATE: "Date",
    TemporalField.START_TIME: "Start time",
    TemporalField.END_TIME: "End time",
}


class ViolationKind(str, enum.Enum):
    MISSING_REQUIRED_FIELD = "missing_required_field"
    INVERTED_TIME_RANGE = "inverted_time_range"


@dataclass(frozen=True)
class Violation:
    field: enum.Enum
    kind: ViolationKind
    message: str
    blocking: bool = True


@dataclass
class SubmissionOutcome:
    record: dict
    booking_id: Optional[str] = None
    warnings: List[Violation] = field(default_factory=list)
    confetti: bool = False


def validate_submission(
    value: FormValue,
    booking_date: Optional[date],
    start_time: Optional[time],
    end_time: Optional[time],
) -> List[Violation]:
    """Collect every problem with the current form in one pass.

    Missing required fields block the submission. An end time that is not
    after the start time is reported but does not block.
    """
    present = {
        FormField.TOWER: bool(value.tower),
        FormField.TOWER_FLOOR: bool(value.tower_floor),
        FormField.MEETING_ROOM: bool(value.meeting_room),
        TemporalField.DATE: booking_date is not None,
        TemporalField.START_TIME: start_time is not None,
        TemporalField.END_TIME: end_time is not None,
    }
    violations = [
        Violation(
            field=f,
            kind=ViolationKind.MISSING_REQUIRED_FIELD,
            message=f"{REQUIRED_LABELS[f]} is required.",
        )
        for f, ok in present.items()
        if not ok
    ]
    if start_time is not None and end_time is not None and end_time <= start_time:
        violations.append(
            Violation(
                field=TemporalField.END_TIME,
                kind=ViolationKind.INVERTED_TIME_RANGE,
                message="End time is not after start time.",
                blocking=False,
            )
        )
    return violations


def serialize_date(value, field=TemporalField.DATE):
    """Midnight UTC of the given day, e.g. ``2024-05-01T00:00:00.000Z``."""
    if value is None:
        raise MissingRequiredField(field)
    stamp = datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    return stamp.strftime("%Y-%m-%dT%H:%M:%S.000Z")


def serialize_time(value, field):
    if value is None:
        raise MissingRequiredField(field)
    return value.strftime("%H:%M")


def build_submission_record(state):
    value = state.value
    return {
        "tower": value.tower,
        "tower_floor": value.tower_floor,
        "meeting_room": value.meeting_room,
        "comment": value.comment,
        "date": serialize_date(state.date),
        "start_time": serialize_time(state.start_time, TemporalField.START_TIME),
        "end_time": serialize_time(state.end_time, TemporalField.END_TIME),
    }


def submit(state: BookingFormState, client=None) -> SubmissionOutcome:
    violations = validate_submission(state.value, state.date, state.start_time, state.end_time)
    blocking = [v for v in violations if v.blocking]
    if blocking:
        logger.warning(
            "Submission rejected: %s",
            ", ".join(getattr(v.field, "value", str(v.field)) for v in blocking),
        )
        raise SubmissionRejected(blocking)
    warnings = [v for v in violations if not v.blocking]
    for warning in warnings:
        logger.warning("Submission warning: %s", warning.message)

    record = build_submission_record(state)
    sink.info(json.dumps(record, ensure_ascii=False))

    booking_id = None
    if client is not None:
        booking_id = client.create_booking(record)
    confetti = state.toggle_confetti()
    return SubmissionOutcome(record=record, booking_id=booking_id, warnings=warnings, confetti=confetti)
