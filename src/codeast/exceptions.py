"""
Exceptions raised by codeast.

Conversion failures are fatal to the single conversion they occur in; no
partial tree is ever returned.
"""


class ASTError(Exception):
    """Base class for all codeast errors."""
    pass


class ConversionError(ASTError):
    """Raised when a serialized AST cannot be converted into a tree."""
    pass


class MalformedMessageError(ConversionError):
    """Raised when the binary message cannot be decoded (truncated, bad wire encoding)."""
    pass


class UnknownKindError(ConversionError):
    """Raised when a serialized kind tag has no counterpart in the model."""
    pass
