"""Key image compositing with Pillow."""

from __future__ import annotations

import base64
import io
from collections.abc import Sequence

from PIL import Image, ImageDraw, UnidentifiedImageError

from deckstatus.render.exceptions import IconError
from deckstatus.status.aggregator import IMAGE_SIZE
from deckstatus.status.models import RenderSlot

BACKGROUND_RADIUS = 20
OUTLINE_COLOR = "#ffffff"
OUTLINE_WIDTH = 2


def load_avatar(data: bytes, size: int = IMAGE_SIZE) -> Image.Image:
    """Decode avatar bytes and scale them to fill a square key image.

    Raises:
        IconError: If the bytes are not a decodable image
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            avatar = img.convert("RGBA")
    except (UnidentifiedImageError, OSError) as e:
        raise IconError(f"Cannot decode avatar image: {e}") from e
    return avatar.resize((size, size))


def draw_indicators(image: Image.Image, slots: Sequence[RenderSlot]) -> None:
    """Draw one outlined status circle per slot, in place."""
    draw = ImageDraw.Draw(image)
    for slot in slots:
        box = (slot.x, slot.y, slot.x + slot.size, slot.y + slot.size)
        draw.ellipse(box, fill=slot.color, outline=OUTLINE_COLOR, width=OUTLINE_WIDTH)


def to_data_url(image: Image.Image) -> str:
    """Encode an image as a PNG data URL."""
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buffer.getvalue()).decode("ascii")


def compose_status_icon(avatar: bytes, slots: Sequence[RenderSlot]) -> str:
    """Avatar with status indicators along the bottom edge.

    Raises:
        IconError: If the avatar cannot be decoded
    """
    image = load_avatar(avatar)
    draw_indicators(image, slots)
    return to_data_url(image)


def compose_badge_icon(avatar: bytes, background: str) -> str:
    """Avatar drawn over a rounded-square background.

    Raises:
        IconError: If the avatar cannot be decoded
    """
    image = Image.new("RGBA", (IMAGE_SIZE, IMAGE_SIZE), (0, 0, 0, 0))
    ImageDraw.Draw(image).rounded_rectangle(
        (0, 0, IMAGE_SIZE - 1, IMAGE_SIZE - 1), radius=BACKGROUND_RADIUS, fill=background
    )
    avatar_image = load_avatar(avatar)
    image.alpha_composite(avatar_image)
    return to_data_url(image)
