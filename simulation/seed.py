"""Default roster and sample data for Ringside Wrestling Manager."""

from __future__ import annotations

from datetime import date, timedelta
from typing import TYPE_CHECKING, Optional

from models.event import Event
from models.wrestler import Wrestler

if TYPE_CHECKING:
    from models.store import GameStore


DEFAULT_WRESTLERS = [
    {
        "name": "The Champion",
        "nickname": "The Best",
        "age": 32,
        "height": 188,
        "weight": 102,
        "homeTown": "Chicago, IL",
        "attributes": {
            "strength": 85, "speed": 75, "technique": 90,
            "charisma": 88, "stamina": 80, "microphone": 85, "popularity": 95,
        },
        "style": {
            "primary": "Technical", "secondary": "Powerhouse",
            "signature": "Perfect Suplex", "finisher": "Champion Lock",
            "preferredRole": "Face", "currentRole": "Face",
        },
        "traits": ["Ambitious", "Hardworking", "Perfectionist"],
        "contract": {"salary": 5000},
    },
    {
        "name": "High Flyer",
        "nickname": "The Aerial Wonder",
        "age": 28,
        "height": 175,
        "weight": 82,
        "homeTown": "San Diego, CA",
        "attributes": {
            "strength": 65, "speed": 95, "technique": 85,
            "charisma": 80, "stamina": 75, "microphone": 70, "popularity": 82,
        },
        "style": {
            "primary": "High-Flyer", "secondary": "Technical",
            "signature": "Phoenix Splash", "finisher": "Shooting Star Press",
            "preferredRole": "Face", "currentRole": "Face",
        },
        "traits": ["Risk-Taker", "Innovative", "Fan Favorite"],
        "contract": {"salary": 3500},
    },
    {
        "name": "The Powerhouse",
        "nickname": "The Unstoppable Force",
        "age": 35,
        "height": 198,
        "weight": 130,
        "homeTown": "Detroit, MI",
        "attributes": {
            "strength": 95, "speed": 60, "technique": 70,
            "charisma": 75, "stamina": 85, "microphone": 65, "popularity": 78,
        },
        "style": {
            "primary": "Powerhouse", "secondary": "Brawler",
            "signature": "Spine Buster", "finisher": "Power Bomb",
            "preferredRole": "Heel", "currentRole": "Heel",
        },
        "traits": ["Intimidating", "Short-tempered", "Dominant"],
        "contract": {"salary": 4000},
    },
]

_VETERAN = {
    "name": "The Veteran",
    "nickname": "The Legend",
    "age": 42,
    "height": 185,
    "weight": 98,
    "homeTown": "Boston, MA",
    "attributes": {
        "strength": 75, "speed": 65, "technique": 95,
        "charisma": 90, "stamina": 70, "microphone": 92, "popularity": 85,
    },
    "style": {
        "primary": "Technical", "secondary": "Submission",
        "signature": "Dragon Suplex", "finisher": "Veteran Crossface",
        "preferredRole": "Face", "currentRole": "Heel",
    },
    "traits": ["Respected", "Mentor", "Traditionalist"],
    "contract": {"salary": 4800},
}


def build_default_wrestlers(signed_on: Optional[date] = None) -> list[Wrestler]:
    wrestlers = []
    for data in DEFAULT_WRESTLERS:
        contract = dict(data["contract"])
        if signed_on is not None:
            contract["signed"] = signed_on
        wrestlers.append(Wrestler.from_json({**data, "contract": contract}))
    return wrestlers


def seed_sample_data(store: "GameStore") -> dict:
    """Populate a freshly created game with titles, a veteran and two events.

    Expects the default roster from ``create_new_game`` to be in place.
    """
    promotion = store.get_player_promotion()
    today = store.game_state.current_date

    veteran = store.wrestlers.add(_VETERAN)
    if promotion is not None:
        promotion.add_wrestler(veteran)

    roster = {w.name: w for w in store.wrestlers.get_all()}
    champion = roster["The Champion"]
    flyer = roster["High Flyer"]
    powerhouse = roster["The Powerhouse"]

    world = store.championships.add({
        "name": "World Championship",
        "prestige": 95,
        "description": "The most prestigious title in the company",
        "type": {"gender": "male", "weight": "heavyweight", "level": "main event", "team": False},
    })
    world.change_champion(champion.id, champion.name, today - timedelta(days=90), "Sample History")
    world.current_champion.defense_count = 4

    intercontinental = store.championships.add({
        "name": "Intercontinental Championship",
        "prestige": 80,
        "description": "The workhorse championship",
        "type": {"gender": "male", "weight": "any", "level": "midcard", "team": False},
    })
    intercontinental.change_champion(flyer.id, flyer.name, today - timedelta(days=45), "Sample History")
    intercontinental.current_champion.defense_count = 2

    for title, holder in ((world, champion), (intercontinental, flyer)):
        if title.id not in holder.stats.championships:
            holder.stats.championships.append(title.id)

    weekly: Event = store.events.add({
        "name": "Weekly Showdown",
        "date": today,
        "type": "Weekly Show",
        "venue": {
            "name": "City Arena", "city": "Los Angeles", "state": "CA",
            "country": "USA", "capacity": 5000, "cost": 10000,
        },
        "attendance": {
            "tickets": {"available": 5000, "sold": 4200},
            "ticketPrices": {"general": 25, "premium": 60, "vip": 120},
        },
    })
    store.events.add({
        "name": "Summer Slam",
        "date": today + timedelta(days=30),
        "type": "Pay-Per-View",
        "venue": {
            "name": "Major Stadium", "city": "New York", "state": "NY",
            "country": "USA", "capacity": 20000, "cost": 50000,
        },
        "attendance": {
            "tickets": {"available": 20000, "sold": 5000},
            "ticketPrices": {"general": 50, "premium": 150, "vip": 300},
        },
    })

    weekly.add_match({
        "title": "World Championship Match",
        "participants": [
            {"id": champion.id, "name": champion.name, "role": "Face"},
            {"id": powerhouse.id, "name": powerhouse.name, "role": "Heel"},
        ],
        "championship": world.id,
        "bookedOutcome": champion.id,
    })
    weekly.add_match({
        "title": "Intercontinental Championship Match",
        "participants": [
            {"id": flyer.id, "name": flyer.name, "role": "Face"},
            {"id": veteran.id, "name": veteran.name, "role": "Heel"},
        ],
        "championship": intercontinental.id,
        "bookedOutcome": flyer.id,
    })

    if promotion is not None:
        promotion.championships = [world.id, intercontinental.id]
        promotion.schedule_show("weekly", {
            "name": "Monday Night Mayhem", "day": "Monday", "time": "20:00",
            "duration": 180, "venue": "Various Arenas", "broadcastPartner": "USA Network",
        })
        promotion.schedule_show("weekly", {
            "name": "Friday Night Fury", "day": "Friday", "time": "20:00",
            "duration": 120, "venue": "Various Arenas", "broadcastPartner": "FOX",
        })

    return {
        "wrestlers": len(store.wrestlers.get_all()),
        "championships": len(store.championships.get_all()),
        "events": len(store.events.get_all()),
    }
