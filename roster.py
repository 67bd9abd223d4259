import json
import logging
import os
from dataclasses import dataclass
from typing import Optional, Tuple, Dict, Any

from config import ROSTER_PATH
from models import Booking, Contractor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RosterSnapshot:
    """
    Contractors and their bookings as read at the start of a request.
    Matching only ever sees this frozen copy.
    """
    contractors: Tuple[Contractor, ...] = ()
    bookings: Tuple[Booking, ...] = ()


def parse_roster(data: Dict[str, Any]) -> RosterSnapshot:
    """
    Build a snapshot from {"contractors": [...], "bookings": [...]}.
    Contractors are ordered by id so first-fit matching is repeatable.
    """
    contractors = [Contractor(**c) for c in data.get("contractors") or []]
    contractors.sort(key=lambda c: str(c.id))
    bookings = [Booking(**b) for b in data.get("bookings") or []]
    return RosterSnapshot(contractors=tuple(contractors), bookings=tuple(bookings))


def load_roster(path: Optional[str] = None) -> RosterSnapshot:
    """
    Load the contractor roster.

    - Deployed: from ROSTER_JSON env var
    - Locally: from roster.json (or ROSTER_PATH / `path`)
    """
    roster_env = os.getenv("ROSTER_JSON")

    if roster_env:
        data = json.loads(roster_env)
    else:
        roster_path = path or ROSTER_PATH
        if not os.path.exists(roster_path):
            logger.warning("Roster file %s not found; matching against an empty roster", roster_path)
            return RosterSnapshot()
        with open(roster_path, encoding="utf-8") as f:
            data = json.load(f)

    snapshot = parse_roster(data)
    logger.info(
        "Loaded roster: %d contractors, %d bookings",
        len(snapshot.contractors),
        len(snapshot.bookings),
    )
    return snapshot
