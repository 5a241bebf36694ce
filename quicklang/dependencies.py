from __future__ import annotations

from fastapi import Request

from quicklang.commands.registry import CommandRegistry
from quicklang.commands.router import Router
from quicklang.config import Settings
from quicklang.google.service import GoogleApiService
from quicklang.telegram.client import TelegramClient
from quicklang.telegram.dispatcher import UpdateDispatcher
from quicklang.telegram.poller import UpdatePoller


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_telegram_client(request: Request) -> TelegramClient:
    return request.app.state.telegram_client


def get_google_service(request: Request) -> GoogleApiService:
    return request.app.state.google_service


def get_command_registry(request: Request) -> CommandRegistry:
    return request.app.state.command_registry


def get_router(request: Request) -> Router:
    return request.app.state.router


def get_dispatcher(request: Request) -> UpdateDispatcher:
    return request.app.state.dispatcher


def get_poller(request: Request) -> UpdatePoller | None:
    """Return the poller, or None when updates arrive by webhook."""
    return getattr(request.app.state, "poller", None)
