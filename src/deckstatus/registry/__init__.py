"""Button registry - lifecycle and refresh scheduling for attached buttons."""

from deckstatus.registry.exceptions import (
    ButtonExistsError,
    ButtonNotFoundError,
    RegistryError,
    UnknownActionError,
)
from deckstatus.registry.models import Button
from deckstatus.registry.registry import ButtonRegistry

__all__ = [
    "Button",
    "ButtonExistsError",
    "ButtonNotFoundError",
    "ButtonRegistry",
    "RegistryError",
    "UnknownActionError",
]
