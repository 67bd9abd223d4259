import os

# Campaign timezone (the property's local time)
TIMEZONE = os.getenv("CAMPAIGN_TIMEZONE", "Australia/Sydney")

# Business hours for rolling-cursor events (24h clock, fractional hours allowed)
OPENING_HOUR = 6
CLOSING_HOUR = 20

# Fixed start hours for pinned events
SUNSET_HOUR = 18  # dusk / drone shoots
FLOORPLAN_HOUR = 16
LAUNCH_MEETING_HOUR = 10
LAUNCH_HOUR = 11
OPEN_HOME_HOUR = 10
MID_WEEK_OPEN_HOME_HOUR = 18
MID_CAMPAIGN_MEETING_HOUR = 18.5
PRE_CLOSING_HOUR = 14
AUCTION_HOUR = 10.5
CLOSING_HOUR_OF_DAY = 12

# Business days between the last media shoot and the launch meeting
LAUNCH_MEETING_BUSINESS_DAYS = 3

# Service catalog: item name -> duration in hours
EVENT_DURATIONS = {
    "Melo Photography - Photography 10 Images": 1.5,
    "Melo Photography - Photography 20 Images": 3,
    "Melo Photography - Photography 7 Images": 1,
    "Melo Photography - Photography 5 Images": 1,
    "Melo Photography - Dusk Photography": 0.5,
    "Melo Photography - Drone Shots": 0.5,
    "Melo - Property Video": 1.5,
    "Melo - Storytelling Videos": 2,
    "Melo - Large Floor Plan": 2,
    "Melo - Medium Floor Plan": 1,
    "Melo - Small Floor Plan": 0.75,
}

# Marketing category names
PHOTOS_CATEGORY = "Photos"
VIDEO_CATEGORY = "Video"
FLOORPLAN_CATEGORY = "Floorplans"
BUNDLE_CATEGORY = "Packages"

# Items matching any of these are never scheduled
EXCLUDED_ITEM_KEYWORDS = ("virtual", "redraw")

# Pre-set bundles. Selecting one overrides everything else that is checked.
BUNDLES = {
    "Essentials Package": {
        "photography": "Melo Photography - Photography 10 Images",
        "floorplan": "Melo - Small Floor Plan",
    },
    "Signature Package": {
        "photography": "Melo Photography - Photography 20 Images",
        "dusk": "Melo Photography - Dusk Photography",
        "video": "Melo - Property Video",
        "floorplan": "Melo - Medium Floor Plan",
    },
    "Prestige Package": {
        "photography": "Melo Photography - Photography 20 Images",
        "dusk": "Melo Photography - Dusk Photography",
        "drone": "Melo Photography - Drone Shots",
        "video": "Melo - Storytelling Videos",
        "floorplan": "Melo - Large Floor Plan",
    },
}

# Sale processes the closing-date logic knows how to branch on
AUCTION = "Auction"
SALE_PROCESSES = {
    AUCTION,
    "Private Treaty",
    "Expressions of Interest",
}

HIGH_END_FINISHES = "high-end"

# Roster snapshot source (see roster.py)
ROSTER_PATH = os.getenv("ROSTER_PATH", "roster.json")

CALENDAR_ID = os.getenv("CALENDAR_ID", "primary")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
