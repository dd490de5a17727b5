"""Rest timer configuration shared with clients."""

from fastapi import APIRouter, Depends

from app.core.config import Settings, get_settings
from app.core.constants import REST_TIMER_ADJUST_STEPS
from app.schemas.progress import RestTimerConfig
from app.services.rest_timer import format_time

router = APIRouter()


@router.get("/config", response_model=RestTimerConfig)
async def rest_timer_config(settings: Settings = Depends(get_settings)):
    """Default rest duration, presets and quick-adjust steps."""
    return RestTimerConfig(
        default_seconds=settings.rest_timer_default_seconds,
        default_display=format_time(settings.rest_timer_default_seconds),
        presets=sorted(settings.rest_timer_presets),
        adjust_steps=list(REST_TIMER_ADJUST_STEPS),
    )
