TELEGRAM_MAX_MESSAGE_LENGTH = 4096

# Preferred split points, best first, with how many separator chars to drop
_SEPARATORS = (("\n\n", 2), ("\n", 1), (". ", 1), (" ", 1))


def split_message(text: str, max_length: int = TELEGRAM_MAX_MESSAGE_LENGTH) -> list[str]:
    """Split a reply into chunks Telegram will accept.

    Split priority: paragraph break > line break > sentence end > space > hard cut.
    """
    if len(text) <= max_length:
        return [text]

    chunks: list[str] = []
    while len(text) > max_length:
        segment = text[:max_length]
        for sep, drop in _SEPARATORS:
            pos = segment.rfind(sep)
            if pos > 0:
                # A sentence end keeps its period
                keep = pos + 1 if sep == ". " else pos
                chunks.append(text[:keep])
                text = text[keep + drop :] if sep == ". " else text[pos + drop :]
                break
        else:
            chunks.append(segment)
            text = text[max_length:]
    if text:
        chunks.append(text)
    return chunks
