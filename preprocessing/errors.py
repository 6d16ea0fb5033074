"""Exceptions raised while preprocessing formula images."""


class FormulaImageError(Exception):
    """Base class for all formula preprocessing errors."""


class UnsupportedFormat(FormulaImageError, ValueError):
    """Pixel buffer has a channel layout the grayscale converter does not handle."""


class InvalidDimensions(FormulaImageError, ValueError):
    """Canvas geometry leaves no room for content."""


class DecodeError(FormulaImageError, OSError):
    """An image file could not be read or decoded."""


class EncodeError(FormulaImageError, OSError):
    """A processed image could not be encoded or written."""
