from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, replace
from datetime import date, time
from typing import MutableMapping, Optional, Union

logger = logging.getLogger(__name__)

FORM_VALUE_KEY = "form_value"
CONFETTI_KEY = "confetti"


class FormField(str, enum.Enum):
    TOWER = "tower"
    TOWER_FLOOR = "tower_floor"
    MEETING_ROOM = "meeting_room"
    COMMENT = "comment"


class TemporalField(str, enum.Enum):
    DATE = "date"
    START_TIME = "start_time"
    END_TIME = "end_time"

    @property
    def state_key(self) -> str:
        return f"booking_{self.value}"


@dataclass(frozen=True)
class FormValue:
    tower: str = ""
    tower_floor: str = ""
    meeting_room: str = ""
    comment: str = ""


DEFAULT_FORM_VALUE = FormValue()

TemporalValue = Optional[Union[date, time]]


class BookingFormState:
    """Owns every state holder of one booking form instance."""

    def __init__(self, store: MutableMapping):
        self._store = store
        if FORM_VALUE_KEY not in store:
            store[FORM_VALUE_KEY] = DEFAULT_FORM_VALUE
        for field in TemporalField:
            if field.state_key not in store:
                store[field.state_key] = None
        if CONFETTI_KEY not in store:
            store[CONFETTI_KEY] = False

    @property
    def value(self) -> FormValue:
        return self._store[FORM_VALUE_KEY]

    def update_field(self, field: Union[FormField, str], value: str):
        # Unknown names fail here, before any state changes.
        field = FormField(field)
        updated = replace(self.value, **{field.value: value})
        self._store[FORM_VALUE_KEY] = updated
        logger.debug("Form field %s set to %r", field.value, value)
        return updated

    def reset(self):
        self._store[FORM_VALUE_KEY] = DEFAULT_FORM_VALUE

    def get_temporal(self, field: Union[TemporalField, str]) -> TemporalValue:
        return self._store[TemporalField(field).state_key]

    def set_temporal(self, field: Union[TemporalField, str], value: TemporalValue):
        field = TemporalField(field)
        self._store[field.state_key] = value
        logger.debug("Temporal field %s set to %r", field.value, value)

    @property
    def date(self) -> Optional[date]:
        return self.get_temporal(TemporalField.DATE)

    @property
    def start_time(self) -> Optional[time]:
        return self.get_temporal(TemporalField.START_TIME)

    @property
    def end_time(self) -> Optional[time]:
        return self.get_temporal(TemporalField.END_TIME)

    @property
    def confetti(self) -> bool:
        return bool(self._store[CONFETTI_KEY])

    def toggle_confetti(self) -> bool:
        self._store[CONFETTI_KEY] = not self.confetti
        return self.confetti

    def clear(self):
        """Return every field to empty. The confetti flag is left alone."""
        self.reset()
        for field in TemporalField:
            self._store[field.state_key] = None
        logger.info("Booking form cleared")
