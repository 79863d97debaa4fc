"""nurlcomponents.errors"""


class UriSyntaxError(ValueError):
    """Raised when a string does not match the grammar of the component it is supposed to represent."""


class OffsetOutOfBounds(UriSyntaxError, IndexError):
    """Raised when a label offset falls outside of the sequence it indexes."""
