import logging
from pathlib import Path
from typing import List

from fastapi import FastAPI, HTTPException
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from config import get_settings
from models import CalculationResults, CompositionSlice, Event, EventResult, WaterState
from services.calculator import calculate_all
from services.event_handler import apply_event
from services.report import build_report, supply_composition
from utils.data_loader import load_defaults


settings = get_settings()
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name, version=settings.app_version)


# Resolve data paths relative to this file
BASE_DIR = Path(__file__).parent
DEFAULTS_PATH = BASE_DIR / settings.defaults_path


# Load data at startup
defaults = load_defaults(str(DEFAULTS_PATH))


@app.get("/defaults")
def get_defaults() -> WaterState:
    return defaults


@app.post("/calculate")
def calculate(state: WaterState) -> CalculationResults:
    return calculate_all(state)


@app.post("/event")
def apply_event_endpoint(event: Event) -> EventResult:
    """
    Apply a single field change (or a reset) and return the new state with
    fully recomputed results.
    """
    try:
        return apply_event(event, defaults)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False, include_input=False))
    except ValueError as e:
        logger.warning("Rejected event type=%s field=%s: %s", event.type, event.field, e)
        raise HTTPException(status_code=400, detail=str(e))


@app.post("/report", response_class=PlainTextResponse)
def report_endpoint(state: WaterState) -> str:
    return build_report(calculate_all(state))


@app.post("/composition")
def composition_endpoint(state: WaterState) -> List[CompositionSlice]:
    return supply_composition(state, calculate_all(state))
