#!/usr/bin/env python3
"""Start the Ringside server on the saved game, or a new one."""

import logging
import sys
from pathlib import Path

ROOT = Path(__file__).parent
sys.path.insert(0, str(ROOT))

from api.app import create_app
from api.services import GameService
from config.environment import get_env_settings
from models.store import GameStore
from simulation.seed import seed_sample_data

env = get_env_settings()
logging.basicConfig(
    level=getattr(logging, env.log_level, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("ringside")

store = GameStore(env.data_dir)
store.load_settings()

started = store.init(load_existing=True)
if not started.success:
    logger.error("Could not start game: %s", started.message)
    sys.exit(1)

if env.sample_data and not store.championships.get_all():
    counts = seed_sample_data(store)
    store.save_game()
    logger.info("Seeded sample data: %s", counts)

service = GameService(store, persist_on_write=env.persist_on_write)
app = create_app(service)

state = store.game_state
print(f"Week {state.game_week}, {state.current_date.isoformat()}: "
      f"{len(store.wrestlers.get_all())} wrestlers, {len(store.events.get_all())} events")

print(f"\nStarting server at http://{env.host}:{env.port}")
app.run(host=env.host, port=env.port, debug=False)
