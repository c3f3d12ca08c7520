import json
import logging
from datetime import date, time

import pytest

from booking_state import BookingFormState, FormField, TemporalField
from errors import BookingError, MissingRequiredField, SubmissionRejected
from submission import (
    SINK_NAME,
    ViolationKind,
    serialize_date,
    serialize_time,
    submit,
    validate_submission,
)


def filled_form():
    form = BookingFormState({})
    form.update_field(FormField.TOWER, "Tower A")
    form.update_field(FormField.TOWER_FLOOR, "10")
    form.update_field(FormField.MEETING_ROOM, "3")
    form.update_field(FormField.COMMENT, "Need projector")
    form.set_temporal(TemporalField.DATE, date(2024, 5, 1))
    form.set_temporal(TemporalField.START_TIME, time(9, 0))
    form.set_temporal(TemporalField.END_TIME, time(10, 0))
    return form


class FakeClient:
    def __init__(self, booking_id="B-1", error=None):
        self.booking_id = booking_id
        self.error = error
        self.records = []

    def create_booking(self, record):
        self.records.append(record)
        if self.error:
            raise self.error
        return self.booking_id


def test_submit_builds_record():
    outcome = submit(filled_form())
    assert outcome.record == {
        "tower": "Tower A",
        "tower_floor": "10",
        "meeting_room": "3",
        "comment": "Need projector",
        "date": "2024-05-01T00:00:00.000Z",
        "start_time": "09:00",
        "end_time": "10:00",
    }
    assert outcome.booking_id is None
    assert outcome.warnings == []


def test_submit_logs_record(caplog):
    with caplog.at_level(logging.INFO, logger=SINK_NAME):
        outcome = submit(filled_form())
    logged = [r for r in caplog.records if r.name == SINK_NAME]
    assert len(logged) == 1
    assert json.loads(logged[0].getMessage()) == outcome.record


def test_confetti_parity():
    form = filled_form()
    assert submit(form).confetti is True
    assert submit(form).confetti is False
    for _ in range(3):
        submit(form)
    assert form.confetti is True


def test_rejected_submit_leaves_confetti_off():
    form = BookingFormState({})
    with pytest.raises(SubmissionRejected):
        submit(form)
    assert form.confetti is False


def test_failed_booking_leaves_confetti_off():
    form = filled_form()
    with pytest.raises(BookingError):
        submit(form, client=FakeClient(error=BookingError("down")))
    assert form.confetti is False


def test_confetti_counts_only_accepted_submits():
    form = filled_form()
    submit(form)
    form.set_temporal(TemporalField.DATE, None)
    with pytest.raises(SubmissionRejected):
        submit(form)
    assert form.confetti is True


def test_sink_gets_one_line_per_submit(caplog):
    form = filled_form()
    form.set_temporal(TemporalField.START_TIME, time(11, 0))
    with caplog.at_level(logging.INFO):
        submit(form)
    logged = [r for r in caplog.records if r.name == SINK_NAME]
    assert len(logged) == 1
    assert json.loads(logged[0].getMessage())["start_time"] == "11:00"
    assert any(r.name == "submission" and r.levelname == "WARNING" for r in caplog.records)


def test_missing_time_is_rejected():
    form = filled_form()
    form.set_temporal(TemporalField.END_TIME, None)
    with pytest.raises(SubmissionRejected) as excinfo:
        submit(form)
    violations = excinfo.value.violations
    assert [v.field for v in violations] == [TemporalField.END_TIME]
    assert violations[0].kind is ViolationKind.MISSING_REQUIRED_FIELD


def test_empty_form_lists_every_required_field(caplog):
    with caplog.at_level(logging.INFO, logger=SINK_NAME):
        with pytest.raises(SubmissionRejected) as excinfo:
            submit(BookingFormState({}))
    fields = {v.field for v in excinfo.value.violations}
    assert fields == {
        FormField.TOWER,
        FormField.TOWER_FLOOR,
        FormField.MEETING_ROOM,
        TemporalField.DATE,
        TemporalField.START_TIME,
        TemporalField.END_TIME,
    }
    assert not [r for r in caplog.records if r.name == SINK_NAME]


def test_comment_is_optional():
    form = filled_form()
    form.update_field(FormField.COMMENT, "")
    assert submit(form).record["comment"] == ""


def test_inverted_range_is_only_a_warning():
    form = filled_form()
    form.set_temporal(TemporalField.START_TIME, time(11, 0))
    outcome = submit(form)
    assert [w.kind for w in outcome.warnings] == [ViolationKind.INVERTED_TIME_RANGE]
    assert outcome.record["start_time"] == "11:00"


def test_validate_clean_form():
    form = filled_form()
    assert validate_submission(form.value, form.date, form.start_time, form.end_time) == []


def test_serializers_refuse_unset_values():
    with pytest.raises(MissingRequiredField) as excinfo:
        serialize_time(None, TemporalField.START_TIME)
    assert excinfo.value.field is TemporalField.START_TIME
    with pytest.raises(MissingRequiredField):
        serialize_date(None)


def test_serialize_time_pads():
    assert serialize_time(time(9, 5), TemporalField.START_TIME) == "09:05"


def test_submit_hands_record_to_client():
    client = FakeClient(booking_id="2024-0001")
    outcome = submit(filled_form(), client=client)
    assert outcome.booking_id == "2024-0001"
    assert client.records == [outcome.record]


def test_client_error_propagates():
    client = FakeClient(error=BookingError("down"))
    with pytest.raises(BookingError):
        submit(filled_form(), client=client)
