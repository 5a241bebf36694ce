from pydantic import BaseModel, ConfigDict


class TelegramUser(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    is_bot: bool = False
    first_name: str = ""
    username: str | None = None


class InboundMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    message_id: int
    chat_id: int
    chat_type: str = "private"  # "private", "group", "supergroup" or "channel"
    date: int = 0
    text: str | None = None
    from_user: TelegramUser | None = None


class CallbackQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    from_user: TelegramUser
    data: str | None = None
    chat_id: int | None = None
    message_id: int | None = None


class BotCommand(BaseModel):
    command: str
    description: str


class HealthResponse(BaseModel):
    status: str
    bot_username: str | None = None
    google_authenticated: bool
    delivery_mode: str
    polling: bool
