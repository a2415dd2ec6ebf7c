"""Whitespace trimming that matches the C locale's notion of whitespace."""

_WHITESPACE = " \t\n\v\f\r"


def ltrim(text: str) -> str:
    """Return ``text`` without leading whitespace."""
    return text.lstrip(_WHITESPACE)


def rtrim(text: str) -> str:
    """Return ``text`` without trailing whitespace."""
    return text.rstrip(_WHITESPACE)


def trim(text: str) -> str:
    """Return ``text`` without leading or trailing whitespace."""
    return rtrim(ltrim(text))