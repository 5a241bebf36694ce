import hmac


def validate_secret_token(header_value: str, secret: str) -> bool:
    """Validate the X-Telegram-Bot-Api-Secret-Token header set by setWebhook.

    An empty configured secret disables the check.
    """
    if not secret:
        return True
    return hmac.compare_digest(header_value.encode(), secret.encode())
