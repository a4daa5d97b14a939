"""Promotion model: the company ledger, roster accounting and facilities."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Any, Iterable, Optional

from pydantic import Field

from .base import Entity, GameDate, Record, add_years, as_date, new_id, today
from .results import Err, ErrorKind, Ok, Result

if TYPE_CHECKING:
    from .event import Event
    from .wrestler import Wrestler

logger = logging.getLogger(__name__)

SHOW_TYPES = ("weekly", "monthly", "annual")
STAFF_ROLES = ("bookers", "scouts", "trainers", "producers")
FACILITIES = ("headquarters", "trainingCenter", "performanceCenter")
DEAL_TYPES = ("Television", "Streaming")
TRANSACTION_TYPES = ("income", "expense")

SIZE_RANKING = {"Small": 1, "Medium": 2, "Large": 3}

QUALITY_UPGRADE_COST = 50_000
QUALITY_MONTHLY_COST = 1_000
SIZE_UPGRADE_COST = 100_000
SIZE_MONTHLY_COST = 2_000
PERFORMANCE_CENTER_COST = 250_000


# ---------------------------------------------------------------------------
# Nested records
# ---------------------------------------------------------------------------

class Details(Record):
    owner: str = "Player Name"
    headquarters_city: str = "City"
    headquarters_country: str = "Country"
    website: str = "www.promotion.com"
    slogan: str = "Wrestling for everyone!"
    description: str = ""


class Reputation(Record):
    overall: int = 50
    local_market: int = 60
    national_market: int = 40
    international_market: int = 20
    industry_prestige: int = 30


class AgeGroups(Record):
    under18: int = 15
    age18to34: int = 45
    age35to50: int = 30
    over50: int = 10


class GenderSplit(Record):
    male: int = 70
    female: int = 25
    other: int = 5


class Demographics(Record):
    casual: int = 60
    hardcore: int = 30
    lapsed: int = 10
    age_groups: AgeGroups = Field(default_factory=AgeGroups)
    gender: GenderSplit = Field(default_factory=GenderSplit)


class FanBase(Record):
    total: int = 10_000
    loyalty: int = 60
    demographics: Demographics = Field(default_factory=Demographics)
    growth: float = 0.0
    satisfaction_rating: int = 70


class Show(Record):
    id: str = Field(default_factory=new_id)
    name: str = "New Show"
    day: str = "Monday"
    time: str = "20:00"
    duration: int = 120  # minutes
    venue: str = "Regular Arena"
    broadcast_partner: Optional[str] = None
    is_active: bool = True


class Shows(Record):
    weekly: list[Show] = Field(default_factory=list)
    monthly: list[Show] = Field(default_factory=list)
    annual: list[Show] = Field(default_factory=list)


class DealRequirements(Record):
    minimum_rating: int = 70
    content_restrictions: list[str] = Field(default_factory=list)


class MediaDeal(Record):
    id: str = Field(default_factory=new_id)
    partner: str = "TV Network"
    type: str = "Television"
    show: Optional[str] = None
    value: float = 100_000.0  # per year
    start_date: GameDate = Field(default_factory=today)
    end_date: Optional[GameDate] = None
    requirements: DealRequirements = Field(default_factory=DealRequirements)


class SocialMedia(Record):
    followers: int = 50_000
    engagement: float = 5.0  # percent
    platforms: list[str] = Field(default_factory=list)


class Broadcasting(Record):
    tv_deals: list[MediaDeal] = Field(default_factory=list)
    streaming_platforms: list[MediaDeal] = Field(default_factory=list)
    social_media: SocialMedia = Field(default_factory=SocialMedia)


class Transaction(Record):
    date: GameDate
    type: str
    amount: float
    description: str = ""
    balance_after: float


class Finances(Record):
    balance: float = 250_000.0
    weekly_revenue: float = 25_000.0
    weekly_expenses: float = 20_000.0
    profit_margin: float = 20.0  # percent
    debt_level: float = 0.0
    credit_rating: str = "A"
    history: list[Transaction] = Field(default_factory=list)


class RosterManagement(Record):
    max_size: int = 30
    current_size: int = 0
    salary_budget: float = 100_000.0
    current_salaries: float = 0.0
    contracts_expiring_soon: list[Any] = Field(default_factory=list)
    wrestler_ids: list[str] = Field(default_factory=list)


class Relationships(Record):
    allies: list[Any] = Field(default_factory=list)
    rivals: list[Any] = Field(default_factory=list)
    talent_exchanges: list[Any] = Field(default_factory=list)


class StaffMember(Record):
    id: str = Field(default_factory=new_id)
    name: str = "New Staff Member"
    specialty: str = ""
    skill: int = 70
    salary: float = 1000.0  # weekly
    hired: GameDate = Field(default_factory=today)


class Staff(Record):
    bookers: list[StaffMember] = Field(default_factory=list)
    scouts: list[StaffMember] = Field(default_factory=list)
    trainers: list[StaffMember] = Field(default_factory=list)
    producers: list[StaffMember] = Field(default_factory=list)


class Policies(Record):
    match_style: str = "Balanced"
    content_rating: str = "PG-13"
    drug_testing: str = "Standard"
    injury_protocol: str = "Cautious"
    talent_development: str = "Moderate"


class Facility(Record):
    quality: int = 1  # 1-5
    size: str = "Small"
    monthly_cost: float = 0.0


class Facilities(Record):
    headquarters: Facility = Field(
        default_factory=lambda: Facility(quality=3, size="Medium", monthly_cost=5000)
    )
    training_center: Facility = Field(
        default_factory=lambda: Facility(quality=2, size="Small", monthly_cost=3000)
    )
    performance_center: Optional[Facility] = None


class CompanyHistory(Record):
    founded_date: GameDate = Field(default_factory=today)
    major_events: list[Any] = Field(default_factory=list)
    hall_of_fame: list[Any] = Field(default_factory=list)
    championships: list[Any] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Promotion
# ---------------------------------------------------------------------------

class Promotion(Entity):
    """A wrestling company, player-owned or rival."""

    name: str = "New Wrestling Promotion"
    short_name: str = "NWP"
    logo: str = "default_logo.png"
    founded: GameDate = Field(default_factory=today)
    is_player_owned: bool = True

    details: Details = Field(default_factory=Details)
    reputation: Reputation = Field(default_factory=Reputation)
    fan_base: FanBase = Field(default_factory=FanBase)
    shows: Shows = Field(default_factory=Shows)
    broadcasting: Broadcasting = Field(default_factory=Broadcasting)
    finances: Finances = Field(default_factory=Finances)
    roster_management: RosterManagement = Field(default_factory=RosterManagement)
    championships: list[str] = Field(default_factory=list)
    storylines: list[Any] = Field(default_factory=list)
    relationships: Relationships = Field(default_factory=Relationships)
    staff: Staff = Field(default_factory=Staff)
    policies: Policies = Field(default_factory=Policies)
    facilities: Facilities = Field(default_factory=Facilities)
    history: CompanyHistory = Field(default_factory=CompanyHistory)

    # ------------------------------------------------------------------
    # Roster
    # ------------------------------------------------------------------

    def add_wrestler(self, wrestler: "Wrestler") -> Result:
        roster = self.roster_management
        if wrestler.id in roster.wrestler_ids:
            return Err(ErrorKind.DUPLICATE, f"{wrestler.name} is already on the roster")
        if roster.current_size >= roster.max_size:
            return Err(ErrorKind.ROSTER_FULL, "Roster is at maximum capacity")

        roster.wrestler_ids.append(wrestler.id)
        roster.current_size += 1
        roster.current_salaries += wrestler.contract.salary

        return Ok(
            f"{wrestler.name} has been added to the roster",
            {
                "current_roster_size": roster.current_size,
                "remaining_capacity": roster.max_size - roster.current_size,
            },
        )

    def remove_wrestler(self, wrestler: "Wrestler") -> Result:
        roster = self.roster_management
        if roster.current_size <= 0:
            return Err(ErrorKind.ROSTER_EMPTY, "Roster is already empty")

        if wrestler.id in roster.wrestler_ids:
            roster.wrestler_ids.remove(wrestler.id)
        roster.current_size -= 1
        roster.current_salaries -= wrestler.contract.salary

        return Ok(
            f"{wrestler.name} has been removed from the roster",
            {"current_roster_size": roster.current_size},
        )

    def reconcile_roster(self, wrestlers: Iterable["Wrestler"]) -> Result:
        """Recount size and payroll from the tracked roster ids.

        ``wrestlers`` is every known wrestler; ids that no longer resolve are
        treated as retired and dropped.
        """
        roster = self.roster_management
        known = {w.id: w for w in wrestlers}
        signed = [known[wid] for wid in roster.wrestler_ids if wid in known]
        dropped = [wid for wid in roster.wrestler_ids if wid not in known]

        size = len(signed)
        salaries = sum(w.contract.salary for w in signed)
        drift = {
            "size_drift": roster.current_size - size,
            "salary_drift": roster.current_salaries - salaries,
            "dropped_ids": dropped,
        }
        if drift["size_drift"] or drift["salary_drift"] or dropped:
            logger.info("Roster drift for %s: %s", self.name, drift)

        roster.wrestler_ids = [w.id for w in signed]
        roster.current_size = size
        roster.current_salaries = salaries

        return Ok(
            f"Roster reconciled for {self.name}",
            {"current_roster_size": size, "current_salaries": salaries, **drift},
        )

    # ------------------------------------------------------------------
    # Shows and media
    # ------------------------------------------------------------------

    def schedule_show(self, show_type: str, details: Optional[dict[str, Any]] = None) -> Result:
        if show_type not in SHOW_TYPES:
            return Err(ErrorKind.INVALID_ARGUMENT, "Invalid show type")

        show = Show.model_validate(details or {})
        getattr(self.shows, show_type).append(show)

        return Ok(
            f"{show.name} has been scheduled as a {show_type} show",
            {"show_id": show.id},
        )

    def cancel_show(self, show_type: str, show_id: str) -> Result:
        if show_type not in SHOW_TYPES:
            return Err(ErrorKind.INVALID_ARGUMENT, "Invalid show type")

        show = next((s for s in getattr(self.shows, show_type) if s.id == show_id), None)
        if show is None:
            return Err(ErrorKind.NOT_FOUND, "Show not found")

        show.is_active = False
        return Ok(f"{show.name} has been cancelled", {"show": show.to_json()})

    def add_media_deal(self, details: Optional[dict[str, Any]] = None) -> Result:
        deal = MediaDeal.model_validate(details or {})
        if deal.type not in DEAL_TYPES:
            return Err(ErrorKind.INVALID_ARGUMENT, f"Invalid deal type: {deal.type}")
        if deal.end_date is None:
            deal.end_date = add_years(deal.start_date, 3)

        if deal.type == "Television":
            self.broadcasting.tv_deals.append(deal)
        else:
            self.broadcasting.streaming_platforms.append(deal)

        self.finances.weekly_revenue += math.floor(deal.value / 52)

        return Ok(
            f"New {deal.type} deal added with {deal.partner}",
            {"deal": deal.to_json()},
        )

    # ------------------------------------------------------------------
    # Ledger
    # ------------------------------------------------------------------

    def _recompute_profit_margin(self) -> None:
        revenue = self.finances.weekly_revenue
        if revenue == 0:
            return
        self.finances.profit_margin = (revenue - self.finances.weekly_expenses) / revenue * 100

    def _record(self, kind: str, amount: float, description: str, on) -> Transaction:
        entry = Transaction(
            date=as_date(on) or today(),
            type=kind,
            amount=amount,
            description=description,
            balance_after=self.finances.balance,
        )
        self.finances.history.append(entry)
        return entry

    def update_finances(self, kind: str, amount: float, description: str = "", on=None) -> Result:
        """Apply one income or expense and log it with the resulting balance."""
        if kind not in TRANSACTION_TYPES:
            return Err(ErrorKind.INVALID_ARGUMENT, f"Invalid transaction type: {kind}")

        if kind == "income":
            self.finances.balance += amount
        else:
            self.finances.balance -= amount
        self._record(kind, amount, description, on)
        self._recompute_profit_margin()

        return Ok(
            f"Financial {kind} of ${amount:,.0f} recorded: {description}",
            {"current_balance": self.finances.balance},
        )

    def process_weekly_finances(self, on=None) -> Result:
        finances = self.finances
        weekly_profit = finances.weekly_revenue - finances.weekly_expenses
        finances.balance += weekly_profit
        self._record(
            "income" if weekly_profit >= 0 else "expense",
            abs(weekly_profit),
            "Weekly operations",
            on,
        )
        self._recompute_profit_margin()

        label = "Profit" if weekly_profit >= 0 else "Loss"
        return Ok(
            f"Weekly finances processed: {label} of ${abs(weekly_profit):,.0f}",
            {
                "weekly_revenue": finances.weekly_revenue,
                "weekly_expenses": finances.weekly_expenses,
                "weekly_profit": weekly_profit,
                "current_balance": finances.balance,
            },
        )

    # ------------------------------------------------------------------
    # Facilities
    # ------------------------------------------------------------------

    def _facility(self, facility: str) -> Optional[Facility]:
        return {
            "headquarters": self.facilities.headquarters,
            "trainingCenter": self.facilities.training_center,
            "performanceCenter": self.facilities.performance_center,
        }[facility]

    def upgrade_facility(
        self,
        facility: str,
        quality: Optional[int] = None,
        size: Optional[str] = None,
        on=None,
    ) -> Result:
        """Raise a facility's quality and/or size tier. Downgrades fail."""
        if facility not in FACILITIES:
            return Err(ErrorKind.INVALID_ARGUMENT, "Invalid facility type")

        if facility == "performanceCenter" and self.facilities.performance_center is None:
            self.facilities.performance_center = Facility(quality=1, size="Small", monthly_cost=10_000)
            self.update_finances(
                "expense", PERFORMANCE_CENTER_COST, "Performance Center construction", on
            )
            return Ok(
                "Performance Center has been built",
                {"facility": self.facilities.performance_center.to_json()},
            )

        current = self._facility(facility)
        if quality is None and size is None:
            return Err(ErrorKind.INVALID_ARGUMENT, "No upgrade requested")

        # Validate both parts before touching anything.
        if quality is not None and quality <= current.quality:
            return Err(ErrorKind.DOWNGRADE, "Cannot downgrade facility quality")
        if size is not None:
            if size not in SIZE_RANKING:
                return Err(ErrorKind.INVALID_ARGUMENT, f"Invalid facility size: {size}")
            if SIZE_RANKING[size] <= SIZE_RANKING[current.size]:
                return Err(ErrorKind.DOWNGRADE, "Cannot downsize facility")

        if quality is not None:
            levels = quality - current.quality
            self.update_finances(
                "expense", levels * QUALITY_UPGRADE_COST, f"{facility} quality upgrade", on
            )
            current.quality = quality
            current.monthly_cost += levels * QUALITY_MONTHLY_COST

        if size is not None:
            levels = SIZE_RANKING[size] - SIZE_RANKING[current.size]
            self.update_finances(
                "expense", levels * SIZE_UPGRADE_COST, f"{facility} size upgrade", on
            )
            current.size = size
            current.monthly_cost += levels * SIZE_MONTHLY_COST

        return Ok(f"{facility} has been upgraded", {"facility": current.to_json()})

    # ------------------------------------------------------------------
    # Fans
    # ------------------------------------------------------------------

    def calculate_fan_satisfaction(self, recent_events: Optional[Iterable["Event"]] = None) -> int:
        events = list(recent_events or [])
        if not events:
            return self.fan_base.satisfaction_rating

        average = sum(e.ratings.overall for e in events) / len(events)
        on_100_scale = average / 5 * 100
        blended = self.fan_base.satisfaction_rating * 0.7 + on_100_scale * 0.3
        self.fan_base.satisfaction_rating = math.floor(max(0, min(100, blended)) + 0.5)
        return self.fan_base.satisfaction_rating

    def update_fan_base(
        self,
        fan_change: int = 0,
        growth_change: float = 0.0,
        satisfaction_change: int = 0,
        demographics: Optional[dict[str, Any]] = None,
    ) -> Result:
        fans = self.fan_base
        fans.total += fan_change
        fans.growth += growth_change
        if satisfaction_change:
            fans.satisfaction_rating = max(0, min(100, fans.satisfaction_rating + satisfaction_change))

        if demographics:
            current = fans.demographics.to_json()
            if demographics.get("casual"):
                current["casual"] = demographics["casual"]
                current["hardcore"] = demographics.get("hardcore") or current["hardcore"]
                current["lapsed"] = demographics.get("lapsed") or current["lapsed"]
            for section in ("ageGroups", "gender"):
                if demographics.get(section):
                    current[section].update(demographics[section])
            fans.demographics = Demographics.model_validate(current)

        return Ok(
            "Fan base updated",
            {
                "current_fans": fans.total,
                "satisfaction": fans.satisfaction_rating,
                "growth": fans.growth,
            },
        )

    # ------------------------------------------------------------------
    # Staff
    # ------------------------------------------------------------------

    def add_staff_member(self, role: str, details: Optional[dict[str, Any]] = None) -> Result:
        if role not in STAFF_ROLES:
            return Err(ErrorKind.INVALID_ARGUMENT, "Invalid staff role")

        member = StaffMember.model_validate(details or {})
        getattr(self.staff, role).append(member)
        self.finances.weekly_expenses += member.salary

        return Ok(
            f"{member.name} has been hired as a {role[:-1]}",
            {"staff_member": member.to_json()},
        )

    def remove_staff_member(self, role: str, member_id: str) -> Result:
        if role not in STAFF_ROLES:
            return Err(ErrorKind.INVALID_ARGUMENT, "Invalid staff role")

        members = getattr(self.staff, role)
        member = next((m for m in members if m.id == member_id), None)
        if member is None:
            return Err(ErrorKind.NOT_FOUND, "Staff member not found")

        members.remove(member)
        self.finances.weekly_expenses -= member.salary

        return Ok(
            f"{member.name} has been removed from staff",
            {"staff_member": member.to_json()},
        )
