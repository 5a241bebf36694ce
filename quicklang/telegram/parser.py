from quicklang.models import CallbackQuery, InboundMessage, TelegramUser


def _user(raw: dict | None) -> TelegramUser | None:
    if not raw:
        return None
    return TelegramUser(
        id=raw["id"],
        is_bot=raw.get("is_bot", False),
        first_name=raw.get("first_name", ""),
        username=raw.get("username"),
    )


def extract_message(update: dict) -> InboundMessage | None:
    """Extract the chat message from a Bot API update, if it carries one.

    Only ``message`` updates are routed; edits and channel posts are ignored.
    Non-text messages (stickers, photos) still produce a message with ``text=None``.
    """
    msg = update.get("message")
    if not msg:
        return None
    chat = msg.get("chat", {})
    return InboundMessage(
        message_id=msg["message_id"],
        chat_id=chat["id"],
        chat_type=chat.get("type", "private"),
        date=msg.get("date", 0),
        text=msg.get("text"),
        from_user=_user(msg.get("from")),
    )


def extract_callback_query(update: dict) -> CallbackQuery | None:
    query = update.get("callback_query")
    if not query:
        return None
    origin = query.get("message") or {}
    return CallbackQuery(
        id=query["id"],
        from_user=_user(query["from"]),
        data=query.get("data"),
        chat_id=origin.get("chat", {}).get("id"),
        message_id=origin.get("message_id"),
    )
