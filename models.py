from dataclasses import dataclass
from datetime import datetime
from typing import Optional, List, Dict, Any

from pydantic import BaseModel, field_validator


# =====================================================
# Request-side models (what the caller sends us)
# =====================================================
class MarketingItem(BaseModel):
    name: str
    is_checked: bool = False


class MarketingCategory(BaseModel):
    category: str
    items: List[MarketingItem] = []


class MarketingConfig(BaseModel):
    categories: List[MarketingCategory] = []


class CampaignParameters(BaseModel):
    prepare_marketing: str = "ASAP"
    conclusion_date: str = "4 weeks"
    sale_process: str = "Private Treaty"
    finishes: str = ""
    has_water_views: bool = False
    address: str = ""


class DayAvailability(BaseModel):
    available: bool = False
    start_time: str = "09:00"  # HH:MM, campaign timezone
    end_time: str = "17:00"

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_clock(cls, v: str) -> str:
        v = v.strip()
        try:
            datetime.strptime(v, "%H:%M")
        except ValueError:
            raise ValueError(f"expected an HH:MM time, got {v!r}")
        return v


class Contractor(BaseModel):
    id: str
    name: str
    mobile: str = ""
    email: str = ""
    picture: str = ""
    services: List[str] = []  # "Photographer" / "Videographer"
    availability: Dict[str, DayAvailability] = {}  # "MON" ... "SUN"


class Booking(BaseModel):
    contractor_id: str
    start_time: datetime
    end_time: datetime


# =====================================================
# Engine-side values
# =====================================================
@dataclass(frozen=True)
class ServiceItem:
    name: str
    duration_hours: float


@dataclass(frozen=True)
class ContractorRef:
    id: str
    name: str
    mobile: str = ""
    email: str = ""
    picture: str = ""

    @classmethod
    def from_contractor(cls, contractor: Contractor) -> "ContractorRef":
        return cls(
            id=contractor.id,
            name=contractor.name,
            mobile=contractor.mobile,
            email=contractor.email,
            picture=contractor.picture,
        )

    def to_dict(self) -> Dict[str, str]:
        return {
            "id": self.id,
            "name": self.name,
            "mobile": self.mobile,
            "email": self.email,
            "picture": self.picture,
        }


@dataclass(frozen=True)
class Event:
    summary: str
    start: datetime
    end: Optional[datetime] = None
    contractor: Optional[ContractorRef] = None

    def to_dict(self) -> Dict[str, Any]:
        """
        JSON-ready dict. Timestamps keep the campaign timezone offset,
        e.g. "2024-03-05T06:00:00+11:00". The contractor key is only
        present once someone has been assigned.
        """
        data: Dict[str, Any] = {
            "summary": self.summary,
            "start": self.start.isoformat(),
            "end": self.end.isoformat() if self.end is not None else None,
        }
        if self.contractor is not None:
            data["contractor"] = self.contractor.to_dict()
        return data
