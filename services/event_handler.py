from typing import Optional

from config import Settings
from models import Event, EventResult, WaterState
from services.calculator import calculate_all


def apply_event(event: Event, defaults: WaterState, settings: Optional[Settings] = None) -> EventResult:
    """
    - Set one field of the given water state (the defaults when none is given),
      or reset it to the defaults
    - Re-run calculate_all on the whole updated state
    - Return the new state and its results
    """
    if event.type == "reset":
        state = defaults.model_copy()
    elif event.type == "set":
        if event.field not in WaterState.model_fields:
            raise ValueError(f"Unknown field: {event.field}")
        if event.value is None:
            raise ValueError(f"No value given for field {event.field}")
        # Validate through the model so range limits still apply
        base = event.state if event.state is not None else defaults
        state = WaterState.model_validate({**base.model_dump(), event.field: event.value})
    else:
        raise ValueError(f"Unknown event type: {event.type}")

    return EventResult(state=state, results=calculate_all(state, settings))
