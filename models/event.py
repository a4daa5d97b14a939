"""Event model: venue, match card, attendance and event financials."""

from __future__ import annotations

import enum
import math
from typing import Any, Optional

from pydantic import Field, model_validator

from .base import Entity, GameDate, Record, is_number, new_id, today
from .results import Err, ErrorKind, Ok, Result


class EventType(str, enum.Enum):
    WEEKLY_SHOW = "Weekly Show"
    PAY_PER_VIEW = "Pay-Per-View"
    SPECIAL = "Special"


class EventStatus(str, enum.Enum):
    SCHEDULED = "Scheduled"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


DRAW = "draw"


# ---------------------------------------------------------------------------
# Nested records
# ---------------------------------------------------------------------------

class Venue(Record):
    name: str = "Local Arena"
    city: str = "City"
    state: str = "State"
    country: str = "Country"
    capacity: int = 1000
    cost: float = 2000.0


class Tickets(Record):
    available: Optional[int] = None  # defaults to venue capacity
    sold: int = 0
    comped: int = 0


class TicketPrices(Record):
    general: float = 20.0
    premium: float = 50.0
    vip: float = 100.0


class Attendance(Record):
    tickets: Tickets = Field(default_factory=Tickets)
    ticket_prices: TicketPrices = Field(default_factory=TicketPrices)
    forecasted: int = 0
    actual: int = 0
    percent_full: int = 0


class Participant(Record):
    id: Optional[str] = None
    name: str = ""
    role: str = ""


class Match(Record):
    id: str = Field(default_factory=new_id)
    title: str = "Singles Match"
    type: str = "Singles"
    participants: list[Participant] = Field(default_factory=list)
    stipulation: str = ""
    championship: Optional[str] = None
    duration: int = 15  # minutes
    scheduled_order: int = 0
    booked_outcome: Optional[str] = None
    actual_outcome: Optional[str] = None
    rating: float = 0.0
    notes: str = ""


class Ratings(Record):
    overall: float = 0.0  # 0-5 stars
    crowd: float = 0.0
    critical: float = 0.0
    match_ratings: list[Any] = Field(default_factory=list)


class Revenue(Record):
    tickets: float = 0.0
    merchandise: float = 0.0
    sponsorships: float = 0.0
    broadcasting: float = 0.0
    total: float = 0.0


class Expenses(Record):
    venue: Optional[float] = None  # defaults to venue cost
    production: float = 0.0
    talent: float = 0.0
    marketing: float = 0.0
    misc: float = 0.0
    total: float = 0.0


class EventFinances(Record):
    revenue: Revenue = Field(default_factory=Revenue)
    expenses: Expenses = Field(default_factory=Expenses)
    profit: float = 0.0


class Marketing(Record):
    budget: float = 0.0
    social_media_reach: int = 0
    promos: list[Any] = Field(default_factory=list)
    special_attractions: list[Any] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Event
# ---------------------------------------------------------------------------

class Event(Entity):
    """A scheduled show with its card and, once finalized, its actuals."""

    name: str = "New Event"
    date: GameDate = Field(default_factory=today)
    type: EventType = EventType.WEEKLY_SHOW
    status: EventStatus = EventStatus.SCHEDULED
    is_recurring: bool = False
    recurring_pattern: Optional[str] = None

    venue: Venue = Field(default_factory=Venue)
    attendance: Attendance = Field(default_factory=Attendance)
    card: list[Match] = Field(default_factory=list)
    ratings: Ratings = Field(default_factory=Ratings)
    finances: EventFinances = Field(default_factory=EventFinances)
    storyline_progression: list[Any] = Field(default_factory=list)
    marketing: Marketing = Field(default_factory=Marketing)
    notes: str = ""

    @model_validator(mode="after")
    def _venue_defaults(self) -> "Event":
        self._fill_venue_defaults()
        return self

    def _fill_venue_defaults(self) -> None:
        if self.attendance.tickets.available is None:
            self.attendance.tickets.available = self.venue.capacity
        if self.finances.expenses.venue is None:
            self.finances.expenses.venue = self.venue.cost

    # ------------------------------------------------------------------
    # Card
    # ------------------------------------------------------------------

    def add_match(self, match: Optional[dict[str, Any]] = None) -> Result:
        """Append a match to the card in running order."""
        if match is not None and not isinstance(match, dict):
            return Err(ErrorKind.INVALID_ARGUMENT, "Match details must be an object")
        data = dict(match or {})
        data.pop("scheduledOrder", None)
        data.pop("scheduled_order", None)
        data.pop("actualOutcome", None)
        data.pop("actual_outcome", None)
        entry = Match.model_validate(data)
        entry.scheduled_order = len(self.card) + 1
        self.card.append(entry)
        return Ok(
            f"{entry.title} added to {self.name}",
            {"match_id": entry.id, "scheduled_order": entry.scheduled_order},
        )

    def get_match(self, match_id: str) -> Optional[Match]:
        return next((m for m in self.card if m.id == match_id), None)

    def record_match_result(self, match_id: str, winner_id: Optional[str], rating: float = 0.0) -> Result:
        """Store the outcome the caller decided. ``None`` records a draw."""
        match = self.get_match(match_id)
        if match is None:
            return Err(ErrorKind.NOT_FOUND, "Match not found")
        participant_ids = {p.id for p in match.participants}
        if winner_id is not None and winner_id not in participant_ids:
            return Err(ErrorKind.INVALID_ARGUMENT, "Winner is not a participant in this match")
        if not is_number(rating):
            return Err(ErrorKind.INVALID_ARGUMENT, f"Match rating must be a number: {rating!r}")

        match.actual_outcome = winner_id if winner_id is not None else DRAW
        match.rating = rating
        return Ok(f"Result recorded for {match.title}", {"match": match.to_json()})

    # ------------------------------------------------------------------
    # Status transitions
    # ------------------------------------------------------------------

    def start_event(self) -> Result:
        if self.status != EventStatus.SCHEDULED:
            return Err(
                ErrorKind.INVALID_TRANSITION,
                f"Cannot start an event that is {self.status.value}",
            )
        self.status = EventStatus.IN_PROGRESS
        return Ok(f"{self.name} is under way", {"status": self.status.value})

    def cancel_event(self) -> Result:
        if self.status not in (EventStatus.SCHEDULED, EventStatus.IN_PROGRESS):
            return Err(
                ErrorKind.INVALID_TRANSITION,
                f"Cannot cancel an event that is {self.status.value}",
            )
        self.status = EventStatus.CANCELLED
        return Ok(f"{self.name} has been cancelled", {"status": self.status.value})

    def finalize_event(
        self,
        attendance: int = 0,
        ratings: Optional[dict[str, Any]] = None,
        finances: Optional[dict[str, Any]] = None,
    ) -> Result:
        """Close the event out with its actual numbers.

        One-way transition to Completed. There is no guard against a second
        call; callers check ``status`` first.
        """
        if not is_number(attendance) or attendance < 0 or attendance != int(attendance):
            return Err(ErrorKind.INVALID_ARGUMENT, f"Attendance must be a non-negative whole number: {attendance!r}")
        attendance = int(attendance)
        if ratings is not None and not isinstance(ratings, dict):
            return Err(ErrorKind.INVALID_ARGUMENT, "Ratings must be an object")
        if finances is not None and not isinstance(finances, dict):
            return Err(ErrorKind.INVALID_ARGUMENT, "Finances must be an object")
        new_ratings = Ratings.model_validate(ratings) if ratings is not None else None
        new_finances = EventFinances.model_validate(finances) if finances is not None else None

        self.status = EventStatus.COMPLETED

        self.attendance.actual = attendance
        capacity = self.venue.capacity
        self.attendance.percent_full = math.floor(attendance / capacity * 100 + 0.5) if capacity else 0

        if new_ratings is not None:
            self.ratings = new_ratings
        if new_finances is not None:
            self.finances = new_finances
            self._fill_venue_defaults()

        self.finances.profit = self.finances.revenue.total - self.finances.expenses.total

        return Ok(
            f"{self.name} has been completed",
            {
                "attendance": self.attendance.actual,
                "percent_full": self.attendance.percent_full,
                "profit": self.finances.profit,
            },
        )

    # ------------------------------------------------------------------
    # Projections
    # ------------------------------------------------------------------

    def calculate_expected_revenue(self) -> float:
        available = self.attendance.tickets.available or 0
        prices = self.attendance.ticket_prices
        return (
            available * 0.7 * prices.general
            + available * 0.2 * prices.premium
            + available * 0.1 * prices.vip
        )
