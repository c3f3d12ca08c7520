import os

import streamlit as st

APP_TITLE = "Meeting Room Booking"
DEFAULT_WEBHOOK_TIMEOUT = 10.0
DEFAULT_LOG_LEVEL = "INFO"


def _get_setting(name, default=""):
    try:
        value = str(st.secrets.get(name, "")).strip()
    except Exception:
        value = ""
    if not value:
        value = os.getenv(name, "").strip()
    return value or default


def get_webhook_url():
    return _get_setting("BOOKING_WEBHOOK_URL")


def get_webhook_timeout():
    raw = _get_setting("BOOKING_WEBHOOK_TIMEOUT")
    if not raw:
        return DEFAULT_WEBHOOK_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError:
        return DEFAULT_WEBHOOK_TIMEOUT
    return timeout if timeout > 0 else DEFAULT_WEBHOOK_TIMEOUT


def get_log_level():
    return _get_setting("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
