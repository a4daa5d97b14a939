"""Championship lineage, defenses and vacating."""

from datetime import date

from models.championship import Championship


def _title() -> Championship:
    return Championship.from_json({"name": "World Championship"})


def test_new_title_is_vacant():
    title = _title()
    assert title.is_vacant
    assert title.current_champion.name == "Vacant"
    assert title.lineage == []


def test_first_champion_leaves_lineage_empty():
    title = _title()
    result = title.change_champion("w1", "Alice", "2024-01-01", "Event A")

    assert result.success
    assert result.data["previous_champion"] is None
    assert title.to_json()["currentChampion"] == {
        "wrestlerId": "w1",
        "name": "Alice",
        "wonOn": "2024-01-01",
        "defenseCount": 0,
    }
    assert title.lineage == []


def test_title_change_appends_concluded_reign():
    title = _title()
    title.change_champion("w1", "Alice", "2024-01-01", "Event A")
    result = title.change_champion("w2", "Bob", "2024-01-31", "Event B")

    lineage = title.to_json()["lineage"]
    assert lineage == [{
        "wrestlerId": "w1",
        "name": "Alice",
        "wonOn": "2024-01-01",
        "lostOn": "2024-01-31",
        "defenseCount": 0,
        "reignDays": 30,
    }]
    assert title.current_champion.name == "Bob"
    assert result.data["previous_champion"]["name"] == "Alice"
    assert result.data["new_champion_name"] == "Bob"


def test_defenses_are_carried_into_lineage():
    title = _title()
    title.change_champion("w1", "Alice", date(2024, 1, 1))
    title.record_defense(date(2024, 1, 8), "Bob")
    result = title.record_defense(date(2024, 1, 15), "Carol", "Weekly Show")

    assert result.data["defense_count"] == 2
    assert result.data["opponent"] == "Carol"

    title.change_champion("w2", "Bob", date(2024, 2, 1))
    assert title.lineage[0].defense_count == 2
    assert title.current_champion.defense_count == 0


def test_defending_a_vacant_title_fails():
    title = _title()
    result = title.record_defense(date(2024, 1, 8), "Bob")

    assert not result.success
    assert result.to_dict()["error"] == "vacant_title"
    assert title.current_champion.defense_count == 0


def test_vacate_records_reason_and_resets_holder():
    title = _title()
    title.change_champion("w1", "Alice", "2024-01-01")
    result = title.vacate("2024-03-01", "Injury")

    assert result.success
    assert title.is_vacant
    entry = title.to_json()["lineage"][0]
    assert entry["vacated"] is True
    assert entry["vacatedReason"] == "Injury"
    assert entry["reignDays"] == 60
    assert result.data["former_champion"]["name"] == "Alice"


def test_vacating_a_vacant_title_fails_without_mutation():
    title = _title()
    result = title.vacate("2024-03-01")

    assert not result.success
    assert title.lineage == []


def test_lineage_grows_only_when_a_holder_is_displaced():
    title = _title()
    title.change_champion("w1", "Alice", "2024-01-01")
    title.vacate("2024-02-01")
    title.change_champion("w2", "Bob", "2024-03-01")
    title.change_champion("w3", "Carol", "2024-04-01")
    title.vacate("2024-05-01")
    title.vacate("2024-05-02")

    assert len(title.lineage) == 4
    for entry in title.lineage:
        assert entry.reign_days == (entry.lost_on - entry.won_on).days


def test_round_trip_keeps_lineage():
    title = _title()
    title.change_champion("w1", "Alice", "2024-01-01")
    title.vacate("2024-02-01", "Retired")
    title.change_champion("w2", "Bob", "2024-03-01")

    data = title.to_json()
    assert Championship.from_json(data).to_json() == data


def test_dates_default_to_today():
    title = _title()
    title.change_champion("w1", "Alice")
    assert title.current_champion.won_on == date.today()

    result = title.record_defense(opponent="Bob")
    assert result.data["date"] == date.today().isoformat()

    assert title.vacate(reason="Injury").success
    assert title.lineage[0].lost_on == date.today()
