# src/gotestadapter/telemetry/logger/processors.py

"""
Custom structlog processors.
"""

from typing import Any

from structlog.typing import EventDict

# Keys callers may pass only to select an emoji; never rendered.
EXTRA_KEYS = ("emoji_key",)


def add_emoji_processor(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Prefixes the event with an emoji chosen by `emoji_key` or the log level."""
    from gotestadapter.telemetry.logger.base import LOG_EMOJIS

    key = event_dict.get("emoji_key")
    emoji = LOG_EMOJIS.get(key) if key else None
    if emoji is None:
        emoji = LOG_EMOJIS.get(method_name, LOG_EMOJIS["general"])
    event = event_dict.get("event")
    if isinstance(event, str):
        event_dict["event"] = f"{emoji} {event}"
    return event_dict


def remove_extra_keys_processor(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    for key in EXTRA_KEYS:
        event_dict.pop(key, None)
    return event_dict
