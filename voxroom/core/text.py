def clip_utf8(text: str, max_bytes: int) -> str:
    """Truncate text to at most max_bytes of UTF-8 without splitting a character."""
    encoded = text.encode("utf-8", errors="replace")
    if len(encoded) <= max_bytes:
        return text
    return encoded[:max_bytes].decode("utf-8", errors="ignore")
