class ParseError(Exception):
    """Base class for every failure raised while scanning a JPEG byte stream."""


class OutOfBounds(ParseError, IndexError):
    """An access past the end (or before the start) of the byte buffer."""


class NotAJpeg(ParseError):
    """The data does not start with a Start-Of-Image marker."""


class TruncatedSegment(ParseError):
    """A marker pair, length field or segment body runs past the end of the data."""


class MalformedFrameHeader(ParseError):
    """A Start-Of-Frame body is shorter than the fixed 6-byte layout."""


class NoFrameHeader(ParseError):
    """The whole stream was scanned without finding a Start-Of-Frame segment."""
