"""Render - Pillow compositing of key images."""

from deckstatus.render.exceptions import IconError
from deckstatus.render.icon import (
    compose_badge_icon,
    compose_status_icon,
    draw_indicators,
    load_avatar,
    to_data_url,
)

__all__ = [
    "IconError",
    "compose_badge_icon",
    "compose_status_icon",
    "draw_indicators",
    "load_avatar",
    "to_data_url",
]
