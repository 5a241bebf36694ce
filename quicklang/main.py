import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from quicklang.commands.builtins import register_builtins
from quicklang.commands.context import CommandContext
from quicklang.commands.menu import publish_commands
from quicklang.commands.registry import CommandRegistry
from quicklang.commands.router import Router
from quicklang.config import Settings
from quicklang.exceptions import TelegramApiError
from quicklang.google.service import GoogleApiService
from quicklang.health.router import router as health_router
from quicklang.logging_config import configure_logging
from quicklang.telegram.client import TelegramClient
from quicklang.telegram.dispatcher import UpdateDispatcher
from quicklang.telegram.poller import UpdatePoller
from quicklang.webhook.router import router as webhook_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings()

    configure_logging(
        level=settings.log_level, json_format=settings.log_json, log_file=settings.log_file
    )

    http_client = httpx.AsyncClient(timeout=httpx.Timeout(30.0, connect=10.0))

    google_service = GoogleApiService(
        http_client=http_client,
        key_file_path=settings.google_key_file_path,
        scopes=settings.google_scopes,
        time_zone=settings.calendar_time_zone,
    )
    telegram_client = TelegramClient(http_client=http_client, token=settings.telegram_token)

    # Google auth and bot identity are both required; failing either aborts startup
    try:
        await google_service.initialize()
        me = await telegram_client.get_me()
    except Exception:
        await http_client.aclose()
        raise
    logger.info("Bot is running as @%s", me.username)

    # Command registry
    command_registry = CommandRegistry()
    context = CommandContext(
        telegram=telegram_client,
        google=google_service,
        settings=settings,
    )
    register_builtins(command_registry, context)

    router = Router(command_registry, bot_username=me.username)
    dispatcher = UpdateDispatcher(router, telegram_client)

    try:
        await publish_commands(command_registry, telegram_client)
    except (TelegramApiError, httpx.HTTPError):
        logger.warning("Could not publish the command menu (non-critical)", exc_info=True)

    poller = None
    try:
        if settings.delivery_mode == "webhook":
            if not settings.telegram_webhook_url:
                raise ValueError("TELEGRAM_WEBHOOK_URL is required when DELIVERY_MODE=webhook")
            await telegram_client.set_webhook(
                settings.telegram_webhook_url,
                secret_token=settings.telegram_webhook_secret or None,
            )
            logger.info("Receiving updates by webhook")
        else:
            # getUpdates is refused while a webhook is registered
            await telegram_client.delete_webhook()
            poller = UpdatePoller(
                telegram_client,
                dispatcher,
                timeout=settings.poll_timeout,
                retry_delay=settings.poll_retry_delay,
            )
    except Exception:
        await http_client.aclose()
        raise
    if poller is not None:
        poller.start()

    app.state.settings = settings
    app.state.http_client = http_client
    app.state.telegram_client = telegram_client
    app.state.google_service = google_service
    app.state.command_registry = command_registry
    app.state.router = router
    app.state.dispatcher = dispatcher
    app.state.poller = poller

    yield

    if poller is not None:
        await poller.stop()
    await router.wait_for_in_flight(timeout=30.0)
    await http_client.aclose()


app = FastAPI(title="Quicklang Bot", lifespan=lifespan)
app.include_router(health_router)
app.include_router(webhook_router)
