from fastapi import APIRouter, Request

from quicklang.dependencies import get_google_service, get_poller, get_router, get_settings
from quicklang.models import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(request: Request) -> HealthResponse:
    settings = get_settings(request)
    google_ok = get_google_service(request).authenticated
    poller = get_poller(request)
    polling = poller is not None and poller.running

    receiving = polling if settings.delivery_mode == "polling" else True
    return HealthResponse(
        status="ok" if google_ok and receiving else "degraded",
        bot_username=get_router(request).bot_username,
        google_authenticated=google_ok,
        delivery_mode=settings.delivery_mode,
        polling=polling,
    )
