import json
import logging

from models import WaterState

logger = logging.getLogger(__name__)


def load_defaults(path: str) -> WaterState:
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    state = WaterState(**data["defaults"])
    logger.info("Loaded default water state from %s", path)
    return state
