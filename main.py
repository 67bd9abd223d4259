from typing import Optional, List
from datetime import datetime
import logging

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from googleapiclient.errors import HttpError
from pydantic import BaseModel

from campaign_logic import plan_campaign
from config import LOG_LEVEL
from date_utils import get_timezone, to_local
from errors import ConfigurationError, InvalidIntervalError
from google_calendar import create_campaign_invite
from models import (
    Booking,
    CampaignParameters,
    Contractor,
    Event,
    MarketingConfig,
)
from roster import load_roster

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# =====================================================
# FastAPI app
# =====================================================

app = FastAPI(title="Campaign Scheduler API")


# =====================================================
# Pydantic models for JSON requests
# =====================================================
class CampaignRequest(BaseModel):
    parameters: CampaignParameters
    marketing: MarketingConfig = MarketingConfig()

    # Roster snapshot; loaded from the roster store when omitted
    contractors: Optional[List[Contractor]] = None
    bookings: Optional[List[Booking]] = None

    # Reference instant, so a retried request gets the same calendar
    now: Optional[datetime] = None


class EventPayload(BaseModel):
    summary: str
    start: datetime
    end: Optional[datetime] = None


class InviteRequest(BaseModel):
    event: EventPayload
    contractor: Contractor
    agent_email: str = ""


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


# =====================================================
# HEALTH
# =====================================================
@app.get("/health")
def health():
    return {"status": "ok"}


# =====================================================
# CAMPAIGN EVENTS (JSON API)
# =====================================================
@app.post("/api/campaigns/events")
def calculate_events(request_data: CampaignRequest):
    if request_data.contractors is None:
        # Contractors and their bookings come from the same snapshot
        if request_data.bookings is not None:
            return error_response(400, "bookings can only be supplied together with contractors")
        roster = load_roster()
        contractors = list(roster.contractors)
        bookings = list(roster.bookings)
    else:
        contractors = request_data.contractors
        bookings = request_data.bookings or []

    try:
        events = plan_campaign(
            request_data.parameters,
            request_data.marketing,
            contractors,
            bookings,
            now=request_data.now,
        )
    except (ConfigurationError, InvalidIntervalError) as e:
        logger.warning("Could not schedule campaign for %r: %s", request_data.parameters.address, e)
        return error_response(400, str(e))

    return {"success": True, "data": [event.to_dict() for event in events]}


# =====================================================
# CALENDAR INVITES
# =====================================================
@app.post("/api/campaigns/invites")
def create_invite(request_data: InviteRequest):
    # Offset-less timestamps are campaign wall-clock time
    tz = get_timezone()
    end = request_data.event.end
    event = Event(
        summary=request_data.event.summary,
        start=to_local(request_data.event.start, tz),
        end=to_local(end, tz) if end is not None else None,
    )

    try:
        event_id = create_campaign_invite(event, request_data.contractor, request_data.agent_email)
    except InvalidIntervalError as e:
        return error_response(400, str(e))
    except HttpError as e:
        logger.error("Calendar invite failed for %s: %s", event.summary, e)
        return error_response(502, f"Calendar invite failed: {str(e)}")

    return {"success": True, "event_id": event_id}
