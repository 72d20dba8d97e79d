"""Custom exceptions for the button registry."""


class RegistryError(Exception):
    """Base exception for button registry errors."""


class ButtonNotFoundError(RegistryError):
    """No button is attached under the given context."""


class ButtonExistsError(RegistryError):
    """A button is already attached under the given context."""


class UnknownActionError(RegistryError):
    """The requested action kind is not registered."""
