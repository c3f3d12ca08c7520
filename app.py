import logging

import streamlit as st

from booking_client import get_booking_client
from booking_state import BookingFormState, FormField, TemporalField
from catalogs import get_floors, get_meeting_rooms, get_towers, room_label
from config import APP_TITLE, get_log_level
from errors import BookingError, SubmissionRejected
from submission import submit

logging.basicConfig(
    level=get_log_level(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

WIDGET_KEYS = {
    FormField.TOWER: "tower_input",
    FormField.TOWER_FLOOR: "tower_floor_input",
    FormField.MEETING_ROOM: "meeting_room_input",
    FormField.COMMENT: "comment_input",
    TemporalField.DATE: "date_input",
    TemporalField.START_TIME: "start_time_input",
    TemporalField.END_TIME: "end_time_input",
}

st.set_page_config(page_title=APP_TITLE, layout="centered")

form = BookingFormState(st.session_state)

if "booking_status" not in st.session_state:
    st.session_state.booking_status = None
if "booking_violations" not in st.session_state:
    st.session_state.booking_violations = []
if "booking_warnings" not in st.session_state:
    st.session_state.booking_warnings = []


def seed_widgets():
    # Widgets always display what the holders say, never their own state.
    value = form.value
    for field in FormField:
        current = getattr(value, field.value)
        if field is FormField.COMMENT:
            st.session_state[WIDGET_KEYS[field]] = current
        else:
            st.session_state[WIDGET_KEYS[field]] = current or None
    for field in TemporalField:
        st.session_state[WIDGET_KEYS[field]] = form.get_temporal(field)


def on_field_change(field):
    raw = st.session_state[WIDGET_KEYS[field]]
    form.update_field(field, raw if raw is not None else "")


def on_temporal_change(field):
    form.set_temporal(field, st.session_state[WIDGET_KEYS[field]])


def clear_status():
    st.session_state.booking_status = None
    st.session_state.booking_violations = []
    st.session_state.booking_warnings = []


def on_clear():
    clear_status()
    form.clear()


def on_submit():
    clear_status()
    client = get_booking_client(st.session_state)
    try:
        outcome = submit(form, client=client)
    except SubmissionRejected as exc:
        st.session_state.booking_violations = [v.message for v in exc.violations]
        return
    except BookingError as exc:
        st.session_state.booking_status = ("error", str(exc))
        return
    st.session_state.booking_warnings = [w.message for w in outcome.warnings]
    if client is None:
        st.session_state.booking_status = (
            "warning",
            "BOOKING_WEBHOOK_URL is not set; booking request was only logged.",
        )
    else:
        st.session_state.booking_status = ("success", f"Booking {outcome.booking_id} submitted.")


st.markdown(
    """
<style>
    .block-container {
        max-width: 640px;
        padding-top: 4rem;
    }
    header, footer { visibility: hidden; }
    .booking-form label[data-testid="stWidgetLabel"] {
        font-family: "Inter", "Helvetica Neue", Helvetica, Arial, sans-serif;
        font-size: 14px;
        font-weight: 500;
    }
    .booking-form textarea,
    .booking-form input {
        background: #ffffff !important;
        color: #111111 !important;
    }
</style>
""",
    unsafe_allow_html=True,
)

if form.confetti:
    st.balloons()

seed_widgets()

st.subheader("Meeting room booking form")

st.markdown('<div class="booking-form">', unsafe_allow_html=True)
with st.container(border=True):
    st.selectbox(
        "Select a tower",
        get_towers(),
        index=None,
        key=WIDGET_KEYS[FormField.TOWER],
        placeholder="Tower",
        on_change=on_field_change,
        args=(FormField.TOWER,),
    )
    st.selectbox(
        "Select a floor",
        get_floors(),
        index=None,
        key=WIDGET_KEYS[FormField.TOWER_FLOOR],
        placeholder="Floor",
        on_change=on_field_change,
        args=(FormField.TOWER_FLOOR,),
    )
    st.selectbox(
        "Select a meeting room",
        [room.number for room in get_meeting_rooms()],
        index=None,
        key=WIDGET_KEYS[FormField.MEETING_ROOM],
        format_func=room_label,
        placeholder="Meeting room",
        on_change=on_field_change,
        args=(FormField.MEETING_ROOM,),
    )

    st.date_input(
        "Select a day",
        value=None,
        key=WIDGET_KEYS[TemporalField.DATE],
        on_change=on_temporal_change,
        args=(TemporalField.DATE,),
    )

    col1, col2 = st.columns(2)
    with col1:
        st.time_input(
            "Start time",
            value=None,
            key=WIDGET_KEYS[TemporalField.START_TIME],
            step=900,
            on_change=on_temporal_change,
            args=(TemporalField.START_TIME,),
        )
    with col2:
        st.time_input(
            "End time",
            value=None,
            key=WIDGET_KEYS[TemporalField.END_TIME],
            step=900,
            on_change=on_temporal_change,
            args=(TemporalField.END_TIME,),
        )

    st.text_area(
        "Comment",
        key=WIDGET_KEYS[FormField.COMMENT],
        placeholder="Enter a comment",
        on_change=on_field_change,
        args=(FormField.COMMENT,),
    )

    status_placeholder = st.empty()
    if st.session_state.booking_status:
        level, msg = st.session_state.booking_status
        if level == "success":
            status_placeholder.success(msg)
        elif level == "error":
            status_placeholder.error(msg)
        elif level == "warning":
            status_placeholder.warning(msg)
    for err in st.session_state.booking_violations:
        st.error(err)
    for warn in st.session_state.booking_warnings:
        st.warning(warn)

    col3, col4 = st.columns(2)
    with col3:
        st.button("Clear", key="clear_button", on_click=on_clear)
    with col4:
        st.button("Submit", key="submit_button", type="primary", on_click=on_submit)
st.markdown("</div>", unsafe_allow_html=True)
