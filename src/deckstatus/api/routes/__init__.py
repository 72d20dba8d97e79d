"""API route modules."""

from deckstatus.api.routes import buttons, events

__all__ = ["buttons", "events"]
