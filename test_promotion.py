"""Promotion ledger, roster accounting, facilities, shows, media and staff."""

from datetime import date

import pytest

from models.event import Event
from models.promotion import Promotion
from models.wrestler import Wrestler


def _promotion(**data) -> Promotion:
    return Promotion.from_json({"name": "Test Promotion", **data})


def _replay(promotion: Promotion, opening: float) -> float:
    balance = opening
    for entry in promotion.finances.history:
        balance += entry.amount if entry.type == "income" else -entry.amount
        assert entry.balance_after == pytest.approx(balance)
    return balance


# ---------------------------------------------------------------------------
# Ledger
# ---------------------------------------------------------------------------

def test_ledger_replays_to_balance():
    promo = _promotion()
    opening = promo.finances.balance

    promo.update_finances("income", 12_500, "Merchandise", "2024-01-02")
    promo.update_finances("expense", 40_000, "Arena rental", "2024-01-03")
    promo.process_weekly_finances(date(2024, 1, 8))
    promo.finances.weekly_expenses = 30_000
    promo.process_weekly_finances(date(2024, 1, 15))

    assert len(promo.finances.history) == 4
    assert _replay(promo, opening) == pytest.approx(promo.finances.balance)


def test_weekly_loss_is_logged_as_expense():
    promo = _promotion(finances={"weeklyRevenue": 1000, "weeklyExpenses": 4000})
    result = promo.process_weekly_finances("2024-01-08")

    entry = promo.finances.history[-1]
    assert entry.type == "expense"
    assert entry.amount == 3000
    assert result.data["weekly_profit"] == -3000
    assert promo.finances.balance == 250_000 - 3000


def test_invalid_transaction_type_is_rejected():
    promo = _promotion()
    result = promo.update_finances("refund", 100)
    assert not result.success
    assert promo.finances.balance == 250_000
    assert promo.finances.history == []


def test_profit_margin_follows_weekly_figures():
    promo = _promotion(finances={"weeklyRevenue": 50_000, "weeklyExpenses": 40_000})
    promo.update_finances("income", 1, "Tip jar")
    assert promo.finances.profit_margin == pytest.approx(20.0)


def test_profit_margin_unchanged_without_revenue():
    promo = _promotion(finances={"weeklyRevenue": 0, "weeklyExpenses": 100, "profitMargin": 12.5})
    promo.process_weekly_finances()
    assert promo.finances.profit_margin == 12.5


# ---------------------------------------------------------------------------
# Roster
# ---------------------------------------------------------------------------

def test_add_then_remove_restores_roster_totals():
    promo = _promotion()
    w = Wrestler.from_json({"name": "Rookie", "contract": {"salary": 2500}})
    before = (promo.roster_management.current_size, promo.roster_management.current_salaries)

    added = promo.add_wrestler(w)
    assert added.success
    assert promo.roster_management.current_salaries == before[1] + 2500
    assert promo.remove_wrestler(w).success
    assert (promo.roster_management.current_size, promo.roster_management.current_salaries) == before


def test_roster_rejects_duplicates_and_overflow():
    promo = _promotion(rosterManagement={"maxSize": 1})
    first, second = Wrestler(), Wrestler()

    assert promo.add_wrestler(first).success
    assert promo.add_wrestler(first).to_dict()["error"] == "duplicate"
    assert promo.add_wrestler(second).to_dict()["error"] == "roster_full"
    assert promo.roster_management.current_size == 1


def test_remove_from_empty_roster_fails():
    result = _promotion().remove_wrestler(Wrestler())
    assert result.to_dict()["error"] == "roster_empty"


def test_reconcile_drops_unknown_ids():
    promo = _promotion()
    kept = Wrestler.from_json({"contract": {"salary": 1000}})
    gone = Wrestler.from_json({"contract": {"salary": 3000}})
    promo.add_wrestler(kept)
    promo.add_wrestler(gone)

    result = promo.reconcile_roster([kept])
    assert result.data["dropped_ids"] == [gone.id]
    assert result.data["size_drift"] == 1
    assert promo.roster_management.current_size == 1
    assert promo.roster_management.current_salaries == 1000


# ---------------------------------------------------------------------------
# Facilities
# ---------------------------------------------------------------------------

def test_quality_upgrade_costs_and_raises_monthly_cost():
    promo = _promotion()
    hq = promo.facilities.headquarters
    old_quality, old_cost = hq.quality, hq.monthly_cost

    result = promo.upgrade_facility("headquarters", quality=old_quality + 2)
    assert result.success
    assert hq.quality == old_quality + 2
    assert hq.monthly_cost == old_cost + 2000
    assert promo.finances.balance == 250_000 - 100_000
    assert promo.finances.history[-1].type == "expense"


@pytest.mark.parametrize("delta", [0, -1])
def test_quality_downgrade_fails_without_mutation(delta):
    promo = _promotion()
    before = promo.to_json()
    hq = promo.facilities.headquarters

    result = promo.upgrade_facility("headquarters", quality=hq.quality + delta)
    assert result.to_dict()["error"] == "downgrade"
    assert promo.to_json() == before


def test_mixed_request_is_validated_before_anything_changes():
    promo = _promotion()
    before = promo.to_json()
    hq = promo.facilities.headquarters

    result = promo.upgrade_facility("headquarters", quality=hq.quality + 1, size="Small")
    assert not result.success
    assert promo.to_json() == before


def test_size_upgrade():
    promo = _promotion()
    result = promo.upgrade_facility("trainingCenter", size="Large")
    assert result.success
    assert promo.facilities.training_center.size == "Large"
    assert promo.finances.balance == 250_000 - 200_000


def test_performance_center_is_built_first():
    promo = _promotion()
    assert promo.facilities.performance_center is None

    result = promo.upgrade_facility("performanceCenter", quality=3)
    assert result.success
    assert promo.facilities.performance_center.quality == 1
    assert promo.finances.balance == 0


def test_unknown_facility_and_empty_request():
    promo = _promotion()
    assert promo.upgrade_facility("arena", quality=5).to_dict()["error"] == "invalid_argument"
    assert promo.upgrade_facility("headquarters").to_dict()["error"] == "invalid_argument"


# ---------------------------------------------------------------------------
# Shows, media, staff, fans
# ---------------------------------------------------------------------------

def test_schedule_and_cancel_show():
    promo = _promotion()
    show_id = promo.schedule_show("weekly", {"name": "Monday Mayhem"}).data["show_id"]
    assert promo.cancel_show("weekly", show_id).success
    assert promo.shows.weekly[0].is_active is False
    assert promo.schedule_show("daily").to_dict()["error"] == "invalid_argument"
    assert promo.cancel_show("weekly", "missing").to_dict()["error"] == "not_found"


def test_media_deal_adds_weekly_revenue():
    promo = _promotion()
    result = promo.add_media_deal({"partner": "FOX", "value": 520_100, "startDate": "2024-01-01"})
    assert result.success
    assert promo.finances.weekly_revenue == 25_000 + 10_001
    assert promo.broadcasting.tv_deals[0].end_date == date(2027, 1, 1)


def test_unknown_media_deal_type_is_rejected():
    promo = _promotion()
    result = promo.add_media_deal({"type": "Radio"})
    assert not result.success
    assert promo.finances.weekly_revenue == 25_000


def test_staff_salaries_follow_hiring():
    promo = _promotion()
    member_id = promo.add_staff_member("bookers", {"name": "Paul", "salary": 1500}).data["staff_member"]["id"]
    assert promo.finances.weekly_expenses == 21_500
    assert promo.remove_staff_member("bookers", member_id).success
    assert promo.finances.weekly_expenses == 20_000
    assert promo.add_staff_member("janitors").to_dict()["error"] == "invalid_argument"


def test_fan_satisfaction_blends_recent_events():
    promo = _promotion()
    events = [Event.from_json({"ratings": {"overall": 5}}), Event.from_json({"ratings": {"overall": 3}})]
    # 70 * 0.7 + 80 * 0.3 = 73
    assert promo.calculate_fan_satisfaction(events) == 73
    assert promo.calculate_fan_satisfaction([]) == 73


def test_update_fan_base_clamps_satisfaction():
    promo = _promotion()
    result = promo.update_fan_base(fan_change=500, satisfaction_change=50)
    assert result.data["current_fans"] == 10_500
    assert result.data["satisfaction"] == 100


def test_round_trip_is_lossless():
    promo = _promotion()
    promo.update_finances("income", 100, "Seed money", "2024-01-01")
    promo.schedule_show("monthly", {"name": "Big Night"})
    data = promo.to_json()
    assert Promotion.from_json(data).to_json() == data
