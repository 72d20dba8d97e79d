"""deckstatus - CI/CD status buttons for a programmable keypad."""

__version__ = "0.1.0"


def get_version() -> str:
    """Return the current version of deckstatus."""
    return __version__
