from typing import Dict, Any
import os
import json
import logging

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build

from config import TIMEZONE, CALENDAR_ID
from errors import InvalidIntervalError
from models import Event, Contractor

SCOPES = ["https://www.googleapis.com/auth/calendar"]

logger = logging.getLogger(__name__)


def get_calendar_service():
    """
    Load Calendar API credentials.

    - Locally: from token.json
    - Deployed: from GOOGLE_CALENDAR_TOKEN_JSON env var
    """
    token_env = os.getenv("GOOGLE_CALENDAR_TOKEN_JSON")

    if token_env:
        data = json.loads(token_env)
        creds = Credentials.from_authorized_user_info(data, SCOPES)
    else:
        creds = Credentials.from_authorized_user_file("token.json", SCOPES)

    service = build("calendar", "v3", credentials=creds)
    return service


def build_invite_body(
    event: Event,
    contractor: Contractor,
    agent_email: str,
) -> Dict[str, Any]:
    """
    Google Calendar event body for a contractor booking.
    Both the contractor and the listing agent are invited.
    """
    if event.end is None:
        raise InvalidIntervalError(f"Can't send an invite for {event.summary!r}: it has no end time")
    if event.end < event.start:
        raise InvalidIntervalError(f"Can't send an invite for {event.summary!r}: it ends before it starts")

    description_lines = [
        f"Contractor: {contractor.name}",
    ]
    if contractor.mobile:
        description_lines.append(f"Mobile: {contractor.mobile}")
    if contractor.email:
        description_lines.append(f"Email: {contractor.email}")

    body = {
        "summary": event.summary,
        "description": "\n".join(description_lines),
        "start": {
            "dateTime": event.start.isoformat(),
            "timeZone": TIMEZONE,
        },
        "end": {
            "dateTime": event.end.isoformat(),
            "timeZone": TIMEZONE,
        },
    }

    attendees = [email for email in (contractor.email, agent_email) if email]
    if attendees:
        body["attendees"] = [{"email": email} for email in attendees]

    return body


def create_campaign_invite(
    event: Event,
    contractor: Contractor,
    agent_email: str,
    calendar_id: str = CALENDAR_ID,
) -> str:
    """
    Create the calendar invite for an assigned shoot and return the
    Google event id.
    """
    body = build_invite_body(event, contractor, agent_email)
    service = get_calendar_service()

    created = service.events().insert(
        calendarId=calendar_id,
        body=body,
        sendUpdates="all",
    ).execute()

    logger.info("Created invite %s for %s (%s)", created.get("id"), event.summary, contractor.name)
    return created["id"]
