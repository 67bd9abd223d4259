# campaign_logic.py

import logging
from dataclasses import dataclass, replace
from datetime import datetime, date, timedelta
from functools import partial, reduce
from typing import Any, Callable, List, Optional, Sequence, Tuple

from config import (
    OPENING_HOUR,
    CLOSING_HOUR,
    SUNSET_HOUR,
    FLOORPLAN_HOUR,
    LAUNCH_MEETING_HOUR,
    LAUNCH_HOUR,
    LAUNCH_MEETING_BUSINESS_DAYS,
    OPEN_HOME_HOUR,
    MID_WEEK_OPEN_HOME_HOUR,
    MID_CAMPAIGN_MEETING_HOUR,
    PRE_CLOSING_HOUR,
    AUCTION_HOUR,
    CLOSING_HOUR_OF_DAY,
    AUCTION,
    SALE_PROCESSES,
    HIGH_END_FINISHES,
)
from contractor_matching import assign_contractors
from date_utils import (
    SATURDAY,
    SUNDAY,
    TUESDAY,
    WEDNESDAY,
    THURSDAY,
    add_business_days,
    add_hours,
    current_time,
    get_timezone,
    localize,
    next_occurrence_of,
    next_weekday,
    next_weekday_excluding_friday,
    parse_weeks,
    shift_days,
    to_local,
)
from errors import ConfigurationError
from models import (
    Booking,
    CampaignParameters,
    Contractor,
    Event,
    MarketingConfig,
)
from service_selection import ServiceSelection, resolve_services

logger = logging.getLogger(__name__)

NOTIFY_SUMMARY = "Notify off market buyers"
DUSK_AND_DRONE_SUMMARY = "Dusk Photography and Drone Shots"
DUSK_SUMMARY = "Dusk Photography"
DRONE_SUMMARY = "Drone Shots"
LAUNCH_MEETING_SUMMARY = "Meeting: Launch to Market"
LAUNCH_SUMMARY = "Launch to Market"
OPEN_HOME_SUMMARY = "Open home"
MID_WEEK_OPEN_HOME_SUMMARY = "Mid-week open home"
MID_CAMPAIGN_MEETING_SUMMARY = "Mid-campaign meeting"
RESERVE_MEETING_SUMMARY = "Reserve Meeting"
PRE_CLOSING_SUMMARY = "Meeting: Pre Closing Date"
AUCTION_SUMMARY = "Auction Date"
CLOSING_SUMMARY = "Closing Date"


@dataclass(frozen=True)
class SchedulingState:
    """
    Everything the sequencer carries from one step to the next.

    current_date / current_hour are the rolling cursor used to pack media
    shoots into the working day. last_media_date is the day of the most
    recent shoot, which the launch meeting is counted from.
    """
    tz: Any
    current_date: date
    current_hour: float = OPENING_HOUR
    last_media_date: Optional[date] = None
    launch_date: Optional[date] = None
    closing_date: Optional[date] = None
    events: Tuple[Event, ...] = ()

    def with_events(self, *events: Event) -> "SchedulingState":
        return replace(self, events=self.events + tuple(events))


Step = Callable[[SchedulingState], SchedulingState]


# =========================
# Small helpers
# =========================
def create_event(
    summary: str,
    day: date,
    start_hour: float,
    duration_hours: Optional[float],
    tz,
) -> Event:
    """
    Event at `start_hour` (wall clock) on `day`. A None duration gives an
    event with no end time.
    """
    start = localize(day, start_hour, tz)
    end = add_hours(start, duration_hours, tz) if duration_hours is not None else None
    return Event(summary=summary, start=start, end=end)


def is_auction(params: CampaignParameters) -> bool:
    return params.sale_process == AUCTION


def validate_sale_process(sale_process: str) -> str:
    if sale_process not in SALE_PROCESSES:
        raise ConfigurationError(
            f"Unknown sale process {sale_process!r}; "
            f"expected one of {sorted(SALE_PROCESSES)}"
        )
    return sale_process


def requires_separate_media_events(
    params: CampaignParameters,
    selection: ServiceSelection,
) -> bool:
    """
    Styled high-end properties with water views get photography and video
    shot separately. Everything else shares one combined shoot.
    """
    finishes = (params.finishes or "").strip().lower()
    return (
        finishes == HIGH_END_FINISHES
        and bool(params.has_water_views)
        and selection.photography is not None
        and selection.video is not None
    )


def compute_marketing_start(params: CampaignParameters, now: datetime, tz) -> datetime:
    """
    - ASAP: tomorrow, same time of day
    - "<N> weeks": N * 7 days from now
    """
    if (params.prepare_marketing or "").strip().upper() == "ASAP":
        return shift_days(now, 1, tz)

    weeks = parse_weeks(params.prepare_marketing, "prepare_marketing")
    return shift_days(now, weeks * 7, tz)


def compute_closing_date(launch_date: date, conclusion_weeks: float, sale_process: str) -> date:
    """
    - Auction: N weeks after launch, moved forward to Saturday
    - Otherwise: N weeks after launch, moved forward to Tue/Wed/Thu
    """
    validate_sale_process(sale_process)
    closing = launch_date + timedelta(days=conclusion_weeks * 7)

    if sale_process == AUCTION:
        allowed = (SATURDAY,)
    else:
        allowed = (TUESDAY, WEDNESDAY, THURSDAY)

    while closing.weekday() not in allowed:
        closing += timedelta(days=1)
    return closing


# =========================
# Media shoots
# =========================
def schedule_event_in_bounds(
    state: SchedulingState,
    summary: str,
    gap_days: int,
    duration_hours: float,
    specific_hour: Optional[float] = None,
) -> SchedulingState:
    """
    Place one media shoot inside the 06:00-20:00 working day.

    The day is snapped to a weekday first. If the shoot wouldn't finish by
    close of business, the cursor resets to opening time on the next
    calendar day; that next day is NOT re-snapped, so a Friday overflow
    lands on Saturday.

    Pinned shoots (specific_hour) don't move the hour cursor.
    """
    current_date = next_weekday(state.current_date + timedelta(days=gap_days))
    current_hour = state.current_hour

    if current_hour + duration_hours > CLOSING_HOUR:
        current_hour = OPENING_HOUR
        current_date += timedelta(days=1)

    start_hour = specific_hour if specific_hour is not None else current_hour
    event = create_event(summary, current_date, start_hour, duration_hours, state.tz)

    if specific_hour is None:
        current_hour += duration_hours

    return replace(
        state,
        current_date=current_date,
        current_hour=current_hour,
        last_media_date=current_date,
        events=state.events + (event,),
    )


def schedule_dusk_and_drone(state: SchedulingState, selection: ServiceSelection) -> SchedulingState:
    dusk, drone = selection.dusk, selection.drone

    if dusk and drone:
        return schedule_event_in_bounds(
            state,
            DUSK_AND_DRONE_SUMMARY,
            0,
            dusk.duration_hours + drone.duration_hours,
            SUNSET_HOUR,
        )
    if dusk:
        return schedule_event_in_bounds(state, DUSK_SUMMARY, 0, dusk.duration_hours, SUNSET_HOUR)
    if drone:
        return schedule_event_in_bounds(state, DRONE_SUMMARY, 0, drone.duration_hours, SUNSET_HOUR)
    return state


def schedule_photography_and_video(
    state: SchedulingState,
    selection: ServiceSelection,
    separate: bool,
) -> SchedulingState:
    photography, video = selection.photography, selection.video

    if photography and video and not separate:
        return schedule_event_in_bounds(
            state,
            f"{photography.name} & {video.name}",
            0,
            photography.duration_hours + video.duration_hours,
        )

    if photography:
        state = schedule_event_in_bounds(state, photography.name, 0, photography.duration_hours)
    if video:
        state = schedule_event_in_bounds(state, video.name, 0, video.duration_hours)
    return state


def schedule_floorplan(state: SchedulingState, selection: ServiceSelection) -> SchedulingState:
    floorplan = selection.floorplan
    if not floorplan:
        return state
    return schedule_event_in_bounds(state, floorplan.name, 0, floorplan.duration_hours, FLOORPLAN_HOUR)


# =========================
# Launch
# =========================
def schedule_launch_meeting(state: SchedulingState) -> SchedulingState:
    """
    Three business days after the last shoot, or the next weekday after
    the cursor when nothing was shot.
    """
    if state.last_media_date is not None:
        meeting_date = add_business_days(state.last_media_date, LAUNCH_MEETING_BUSINESS_DAYS)
    else:
        meeting_date = next_weekday(state.current_date + timedelta(days=1))

    event = create_event(LAUNCH_MEETING_SUMMARY, meeting_date, LAUNCH_MEETING_HOUR, 0.5, state.tz)
    # launch_date holds the meeting day until the launch step snaps it
    return replace(state, launch_date=meeting_date, events=state.events + (event,))


def schedule_launch_to_market(state: SchedulingState) -> SchedulingState:
    # Fri -> Mon (+3), Sat -> Mon (+2), Sun -> Mon (+1)
    launch_date = next_weekday_excluding_friday(state.launch_date)
    event = create_event(LAUNCH_SUMMARY, launch_date, LAUNCH_HOUR, 1, state.tz)
    return replace(state, launch_date=launch_date, events=state.events + (event,))


def set_closing_date(
    state: SchedulingState,
    conclusion_weeks: float,
    sale_process: str,
) -> SchedulingState:
    return replace(
        state,
        closing_date=compute_closing_date(state.launch_date, conclusion_weeks, sale_process),
    )


# =========================
# Open homes
# =========================
def recurring_campaign_events(launch_date: date, closing_date: date, tz) -> List[Event]:
    """
    Weekly open homes between launch and closing.

    Each week (Sunday to Saturday, stepping from the launch date):
      - Wednesday: "Mid-week open home" at 18:00, but only once an open
        home has gone out in an earlier week, and only strictly before
        closing. The first one is followed by the one-off
        "Mid-campaign meeting" at 18:30.
      - Saturday: "Open home" at 10:00 when after launch and on or before
        closing.
    """
    events: List[Event] = []
    current = launch_date
    first_open_home_scheduled = False
    mid_campaign_meeting_scheduled = False

    while current < closing_date:
        wednesday = next_occurrence_of(WEDNESDAY, current)
        if first_open_home_scheduled and wednesday < closing_date:
            events.append(
                create_event(MID_WEEK_OPEN_HOME_SUMMARY, wednesday, MID_WEEK_OPEN_HOME_HOUR, 0.5, tz)
            )
            if not mid_campaign_meeting_scheduled:
                events.append(
                    create_event(
                        MID_CAMPAIGN_MEETING_SUMMARY,
                        wednesday,
                        MID_CAMPAIGN_MEETING_HOUR,
                        0.5,
                        tz,
                    )
                )
                mid_campaign_meeting_scheduled = True

        saturday = next_occurrence_of(SATURDAY, current)
        if launch_date < saturday <= closing_date:
            events.append(create_event(OPEN_HOME_SUMMARY, saturday, OPEN_HOME_HOUR, 0.5, tz))
            first_open_home_scheduled = True

        current += timedelta(days=7)

    return events


def schedule_recurring_events(state: SchedulingState) -> SchedulingState:
    return state.with_events(
        *recurring_campaign_events(state.launch_date, state.closing_date, state.tz)
    )


# =========================
# Closing
# =========================
def schedule_closing_events(state: SchedulingState, auction: bool) -> SchedulingState:
    closing_date = state.closing_date
    pre_closing_date = closing_date - timedelta(days=1)

    # Sunday pre-closing moves back to Saturday; 14:00 keeps it after the open home
    if pre_closing_date.weekday() == SUNDAY:
        pre_closing_date -= timedelta(days=1)

    pre_summary = RESERVE_MEETING_SUMMARY if auction else PRE_CLOSING_SUMMARY
    pre_closing = create_event(pre_summary, pre_closing_date, PRE_CLOSING_HOUR, 1, state.tz)

    if auction:
        terminal = create_event(AUCTION_SUMMARY, closing_date, AUCTION_HOUR, 1, state.tz)
    else:
        terminal = create_event(CLOSING_SUMMARY, closing_date, CLOSING_HOUR_OF_DAY, None, state.tz)

    return state.with_events(pre_closing, terminal)


# =========================
# MAIN CAMPAIGN CALCULATION
# =========================
def build_campaign_steps(
    params: CampaignParameters,
    selection: ServiceSelection,
) -> List[Step]:
    """
    The campaign as an ordered list of state -> state steps.

    Config is parsed up front so a bad value aborts before any event is
    produced.
    """
    conclusion_weeks = parse_weeks(params.conclusion_date, "conclusion_date")
    sale_process = validate_sale_process(params.sale_process)
    separate = requires_separate_media_events(params, selection)

    return [
        partial(schedule_dusk_and_drone, selection=selection),
        partial(schedule_photography_and_video, selection=selection, separate=separate),
        partial(schedule_floorplan, selection=selection),
        schedule_launch_meeting,
        schedule_launch_to_market,
        partial(set_closing_date, conclusion_weeks=conclusion_weeks, sale_process=sale_process),
        schedule_recurring_events,
        partial(schedule_closing_events, auction=is_auction(params)),
    ]


def calculate_campaign_events(
    params: CampaignParameters,
    marketing: MarketingConfig,
    now: Optional[datetime] = None,
    tz_name: Optional[str] = None,
) -> List[Event]:
    """
    Build the full campaign calendar for one property.

    `now` is the reference instant for the whole run; pass it in for
    reproducible output. When omitted the clock is read once, here.
    """
    tz = get_timezone(tz_name)
    now = to_local(now, tz) if now is not None else current_time(tz)

    selection = resolve_services(marketing)
    steps = build_campaign_steps(params, selection)
    marketing_start = compute_marketing_start(params, now, tz)

    initial = SchedulingState(
        tz=tz,
        current_date=marketing_start.date(),
        events=(Event(summary=NOTIFY_SUMMARY, start=marketing_start, end=None),),
    )
    final = reduce(lambda state, step: step(state), steps, initial)

    logger.info(
        "Scheduled %d campaign events for %r (launch %s, closing %s, %s)",
        len(final.events),
        params.address,
        final.launch_date,
        final.closing_date,
        params.sale_process,
    )
    return list(final.events)


def plan_campaign(
    params: CampaignParameters,
    marketing: MarketingConfig,
    contractors: Sequence[Contractor],
    bookings: Sequence[Booking],
    now: Optional[datetime] = None,
    tz_name: Optional[str] = None,
) -> List[Event]:
    """Campaign calendar with contractors attached to the media shoots."""
    tz = get_timezone(tz_name)
    now = to_local(now, tz) if now is not None else current_time(tz)

    events = calculate_campaign_events(params, marketing, now=now, tz_name=tz_name)
    return assign_contractors(events, contractors, bookings, tz_name=tz_name)
