from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import Response

from quicklang.dependencies import get_dispatcher, get_settings
from quicklang.webhook.security import validate_secret_token

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/telegram/webhook")
async def incoming_update(request: Request) -> Response:
    settings = get_settings(request)

    token = request.headers.get("X-Telegram-Bot-Api-Secret-Token", "")
    if not validate_secret_token(token, settings.telegram_webhook_secret):
        logger.warning("Invalid webhook secret token")
        return Response(status_code=403)

    try:
        update = await request.json()
    except ValueError:
        update = None
    if not isinstance(update, dict):
        logger.warning("Webhook body is not a JSON object")
        return Response(status_code=400)

    dispatcher = get_dispatcher(request)
    try:
        await dispatcher.dispatch(update)
    except Exception:
        # Answer 200 anyway, otherwise Telegram keeps redelivering the same update
        logger.exception("Failed to dispatch update %s", update.get("update_id"))

    return Response(status_code=200)
