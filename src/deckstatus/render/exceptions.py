"""Custom exceptions for key image rendering."""


class IconError(Exception):
    """Key image could not be composed."""
