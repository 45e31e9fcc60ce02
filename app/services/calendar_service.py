"""
Google Calendar sync.

Creates one event per booked appointment using a service account. Sync is
best effort: every failure is logged and reported to the caller as None, so a
calendar outage never blocks a booking.
"""
import logging
import time
from datetime import UTC, datetime, timedelta
from urllib.parse import quote

import httpx
from jose import jwt

from app.core.config import Settings
from app.core.exceptions import CalendarSyncFailure

logger = logging.getLogger(__name__)

GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_CALENDAR_API = "https://www.googleapis.com/calendar/v3"
CALENDAR_SCOPE = "https://www.googleapis.com/auth/calendar"
JWT_BEARER_GRANT = "urn:ietf:params:oauth:grant-type:jwt-bearer"

EVENT_DURATION = timedelta(hours=1)
EVENT_REMINDERS = {
    "useDefault": False,
    "overrides": [
        {"method": "email", "minutes": 24 * 60},
        {"method": "popup", "minutes": 30},
    ],
}
# Refresh the cached access token this many seconds before Google expires it
TOKEN_EXPIRY_MARGIN_SECONDS = 60


def build_event_body(name: str, email: str, start_time: datetime, notes: str | None = None) -> dict:
    """Event payload for one appointment. Attendees are left off on purpose:
    service accounts cannot invite attendees without domain-wide delegation."""
    if start_time.tzinfo is None:
        start_time = start_time.replace(tzinfo=UTC)
    start_utc = start_time.astimezone(UTC)
    end_utc = start_utc + EVENT_DURATION
    return {
        "summary": f"Appointment with {name}",
        "description": f"Attendee: {email}\n\n{notes or 'No additional notes'}",
        "start": {"dateTime": start_utc.isoformat(), "timeZone": "UTC"},
        "end": {"dateTime": end_utc.isoformat(), "timeZone": "UTC"},
        "reminders": EVENT_REMINDERS,
    }


class CalendarSyncClient:
    def __init__(
        self,
        service_account_email: str = "",
        private_key: str = "",
        calendar_id: str = "primary",
        timeout_seconds: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._service_account_email = service_account_email
        # Keys pasted into env files usually carry literal "\n" sequences
        self._private_key = private_key.replace("\\n", "\n") if private_key else ""
        self._calendar_id = calendar_id or "primary"
        self._http = http_client or httpx.AsyncClient(timeout=timeout_seconds)
        self._access_token: str | None = None
        self._token_expires_at = 0.0

    @classmethod
    def from_settings(cls, settings: Settings, http_client: httpx.AsyncClient | None = None) -> "CalendarSyncClient":
        return cls(
            service_account_email=settings.google_service_account_email,
            private_key=settings.google_private_key,
            calendar_id=settings.google_calendar_id,
            timeout_seconds=settings.google_calendar_timeout_seconds,
            http_client=http_client,
        )

    @property
    def enabled(self) -> bool:
        return bool(self._service_account_email and self._private_key)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _get_access_token(self) -> str:
        """Exchange a signed service-account assertion for an access token, cached until near expiry."""
        now = time.time()
        if self._access_token and now < self._token_expires_at - TOKEN_EXPIRY_MARGIN_SECONDS:
            return self._access_token
        issued_at = int(now)
        assertion = jwt.encode(
            {
                "iss": self._service_account_email,
                "scope": CALENDAR_SCOPE,
                "aud": GOOGLE_TOKEN_URL,
                "iat": issued_at,
                "exp": issued_at + 3600,
            },
            self._private_key,
            algorithm="RS256",
        )
        resp = await self._http.post(
            GOOGLE_TOKEN_URL,
            data={"grant_type": JWT_BEARER_GRANT, "assertion": assertion},
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
        if resp.status_code != 200:
            raise CalendarSyncFailure(
                f"Token exchange failed: status={resp.status_code} body={resp.text[:500]}"
            )
        tokens = resp.json()
        access_token = tokens.get("access_token")
        if not access_token:
            raise CalendarSyncFailure("Token exchange returned no access_token")
        self._access_token = access_token
        self._token_expires_at = now + int(tokens.get("expires_in", 3600))
        return access_token

    async def create_event(
        self,
        name: str,
        email: str,
        start_time: datetime,
        notes: str | None = None,
    ) -> str | None:
        """Create a one-hour event. Returns the Google event id, or None when
        sync is unconfigured or fails for any reason."""
        if not self.enabled:
            logger.warning("Google Calendar not configured, skipping event creation")
            return None
        try:
            access_token = await self._get_access_token()
            resp = await self._http.post(
                f"{GOOGLE_CALENDAR_API}/calendars/{quote(self._calendar_id, safe='')}/events",
                params={"sendUpdates": "all"},
                headers={"Authorization": f"Bearer {access_token}"},
                json=build_event_body(name, email, start_time, notes),
            )
            if resp.status_code == 401:
                self._access_token = None
            if resp.status_code not in (200, 201):
                raise CalendarSyncFailure(
                    f"Event insert failed: status={resp.status_code} body={resp.text[:500]}"
                )
            event_id = resp.json().get("id")
            if not event_id:
                raise CalendarSyncFailure("Event insert returned no id")
        except Exception as e:
            logger.exception("Failed to create calendar event: %s", e)
            return None
        logger.info("Calendar event created: %s", event_id)
        return event_id
