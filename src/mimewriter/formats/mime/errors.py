"""Exceptions raised while writing MIME content."""


class MimeWriteError(Exception):
    """Base exception for errors raised while writing MIME content."""


class UnsupportedEncodingError(MimeWriteError):
    """Exception raised for an unknown content transfer encoding."""


class CircularReferenceError(MimeWriteError):
    """Exception raised when a content node is reachable from itself."""


class AbstractContentError(MimeWriteError, NotImplementedError):
    """Exception raised when a content class does not implement `write_mime`."""
