"""
MIME message format package.

This package provides the classes for composing MIME messages (RFC 5322,
RFC 2045, RFC 2046 and RFC 2047) from a tree of contents, and the encoding
functions they rely on.
"""

from .content import AdvancedContent, CompositeContent, Message, PlainContent
from .encoder import base64_lines, encoded_word, quoted_printable_lines
from .errors import (
    AbstractContentError,
    CircularReferenceError,
    MimeWriteError,
    UnsupportedEncodingError,
)
from .headers import (
    build_header_field,
    fold_header_field,
    format_date,
    format_header_value,
)
from .mailbox import Mailbox
from .writer import MessageContent, MimeWriter

__all__ = [
    # Contents
    "MessageContent",
    "PlainContent",
    "CompositeContent",
    "AdvancedContent",
    "Message",
    "Mailbox",
    # Writer
    "MimeWriter",
    # Encoder functions
    "base64_lines",
    "quoted_printable_lines",
    "encoded_word",
    # Header functions
    "format_date",
    "format_header_value",
    "build_header_field",
    "fold_header_field",
    # Errors
    "MimeWriteError",
    "UnsupportedEncodingError",
    "CircularReferenceError",
    "AbstractContentError",
]
