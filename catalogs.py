from typing import NamedTuple

import streamlit as st

FIRST_FLOOR = 3
FLOOR_COUNT = 25
ROOM_COUNT = 10


class MeetingRoom(NamedTuple):
    number: str
    name: str


@st.cache_resource(show_spinner=False)
def get_towers():
    return ("Tower A", "Tower B")


@st.cache_resource(show_spinner=False)
def get_floors():
    return tuple(str(FIRST_FLOOR + i) for i in range(FLOOR_COUNT))


@st.cache_resource(show_spinner=False)
def get_meeting_rooms():
    return tuple(
        MeetingRoom(number=str(i), name=f"Meeting Room №{i}")
        for i in range(1, ROOM_COUNT + 1)
    )


def room_label(number: str) -> str:
    """Display name for a room number, used as the select widget's format_func."""
    for room in get_meeting_rooms():
        if room.number == number:
            return room.name
    return number
