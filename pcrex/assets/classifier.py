"""Classification of raw image references."""

from enum import Enum


class ReferenceKind(str, Enum):
    EMPTY = "empty"
    ABSOLUTE = "absolute"
    EMBEDDED = "embedded"
    SERVER_RELATIVE = "server_relative"
    WINDOWS_STYLE = "windows_style"
    BARE_NAME = "bare_name"
    # Output only: never returned by classify()
    PLACEHOLDER = "placeholder"


def normalize_raw(raw) -> str:
    """Return the usable text of a raw reference, or "" when it is absent."""
    if not isinstance(raw, str):
        return ""
    return raw.strip()


def classify(raw) -> ReferenceKind:
    """Determine which kind of reference `raw` is.

    Checks run in a fixed order and the first match wins, so an absolute URL
    that happens to contain backslashes or start-of-path lookalikes is still
    ABSOLUTE. Never raises.
    """
    value = normalize_raw(raw)
    if not value:
        return ReferenceKind.EMPTY
    if value[:8].lower().startswith(("http://", "https://")):
        return ReferenceKind.ABSOLUTE
    if value.startswith("data:image"):
        return ReferenceKind.EMBEDDED
    if value.startswith("/"):
        return ReferenceKind.SERVER_RELATIVE
    if "\\" in value:
        return ReferenceKind.WINDOWS_STYLE
    return ReferenceKind.BARE_NAME
