import logging
from datetime import datetime
from typing import MutableMapping, Optional

import requests

from config import get_webhook_timeout, get_webhook_url
from errors import BookingError

logger = logging.getLogger(__name__)


def make_submission_id(store: MutableMapping, now: Optional[datetime] = None) -> str:
    """Per-session ``<year>-<counter>`` id; the counter restarts every year."""
    year = (now or datetime.utcnow()).year
    if store.get("booking_id_year") != year:
        store["booking_id_year"] = year
        store["booking_id_counter"] = 0
    store["booking_id_counter"] += 1
    return f"{year}-{store['booking_id_counter']:04d}"


class WebhookBookingClient:
    def __init__(self, url: str, store: MutableMapping, timeout: float = 10.0):
        self.url = url
        self.timeout = timeout
        self._store = store

    def create_booking(self, record: dict) -> str:
        try:
            resp = requests.post(self.url, json=record, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("Booking webhook request failed: %s", exc)
            raise BookingError(f"Failed to send booking: {exc}") from exc

        if resp.status_code >= 400:
            detail = resp.text.strip()
            logger.warning("Booking webhook returned HTTP %s: %s", resp.status_code, detail)
            if detail:
                message = f"Failed to send booking (HTTP {resp.status_code}): {detail}"
            else:
                message = f"Failed to send booking (HTTP {resp.status_code})."
            raise BookingError(message, status_code=resp.status_code, detail=detail)

        booking_id = ""
        try:
            payload = resp.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict) and payload.get("id"):
            booking_id = str(payload["id"])
        if not booking_id:
            booking_id = make_submission_id(self._store)
        logger.info("Booking %s accepted by webhook", booking_id)
        return booking_id


def get_booking_client(store: MutableMapping) -> Optional[WebhookBookingClient]:
    url = get_webhook_url()
    if not url:
        return None
    return WebhookBookingClient(url, store, timeout=get_webhook_timeout())
