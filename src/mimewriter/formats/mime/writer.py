"""
MIME write engine.

`MimeWriter` wraps an output sink (a text or binary stream) and writes lines,
header fields and content nodes to it. `MessageContent` is the contract every
content node implements: writing itself through a `MimeWriter`.

A writer keeps the path of content nodes currently being written, which is how
circular structures are detected. Writers are created per top-level write and
must not be shared between threads; the same goes for the node tree being
written, as plain contents cache their encoded body.
"""

import io
import logging
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Optional, Union

from mimewriter.conf import get_setting

from .errors import AbstractContentError, CircularReferenceError
from .headers import build_header_field, fold_header_field

logger = logging.getLogger(__name__)


class MimeWriter:
    """
    Writes the MIME representation of content nodes to an output sink.

    Args:
        sink: A text stream, or a binary stream receiving encoded lines
        linesep: The line separator (default: `MIME_LINE_SEPARATOR`)
        encoding: The encoding used for binary sinks
            (default: `MIME_OUTPUT_ENCODING`)
    """

    def __init__(
        self,
        sink,
        linesep: Optional[str] = None,
        encoding: Optional[str] = None,
    ):
        if linesep is None:
            linesep = get_setting("MIME_LINE_SEPARATOR")

        self.sink = sink
        self.linesep = linesep
        self.encoding = encoding or get_setting("MIME_OUTPUT_ENCODING")
        self.binary = self._is_binary(sink)
        self._path = []

    @classmethod
    def get(cls, sink, **kwargs) -> "MimeWriter":
        """
        Return `sink` if it already is a writer, otherwise a new writer.

        Raises:
            ValueError: If writer options are given along with a writer
        """
        if isinstance(sink, MimeWriter):
            options = sorted(
                name for name, value in kwargs.items() if value is not None
            )
            if options:
                raise ValueError(
                    f"Cannot apply {', '.join(options)} to an existing writer"
                )
            return sink
        return cls(sink, **kwargs)

    @staticmethod
    def _is_binary(sink) -> bool:
        if isinstance(sink, io.TextIOBase):
            return False
        if isinstance(sink, (io.RawIOBase, io.BufferedIOBase)):
            return True
        return "b" in getattr(sink, "mode", "")

    @property
    def depth(self) -> int:
        """Number of content nodes currently being written."""
        return len(self._path)

    def write_line(
        self, line: Union[str, bytes] = "", charset: Optional[str] = None
    ):
        """
        Write a line followed by the line separator.

        Bytes are written unchanged to binary sinks. Text sinks receive them
        decoded with `charset`, undecodable bytes as surrogate escapes.
        """
        if self.binary:
            if isinstance(line, str):
                line = line.encode(self.encoding)
            self.sink.write(line + self.linesep.encode(self.encoding))
        else:
            if isinstance(line, bytes):
                line = line.decode(
                    charset or self.encoding, errors="surrogateescape"
                )
            self.sink.write(line + self.linesep)

    def write_header_field(
        self, name: str, value: Any, params: Optional[Dict[str, Any]] = None
    ):
        """Write a header field, folded if needed. Missing values are skipped."""
        header_field = build_header_field(name, value, params)
        if header_field is None:
            return

        for line in fold_header_field(header_field):
            self.write_line(line)

    @contextmanager
    def _visiting(self, content):
        if any(node is content for node in self._path):
            logger.error(
                "Circular reference to %s %s detected at depth %d",
                type(content).__name__,
                content.node_id,
                self.depth,
            )
            raise CircularReferenceError(
                f"Circular object reference detected: {type(content).__name__} "
                f"{content.node_id}"
            )

        self._path.append(content)
        try:
            yield
        finally:
            self._path.pop()

    def write_content(self, content: "MessageContent", nested: bool = True):
        """
        Write a content node.

        A message written as nested content is introduced by a
        `Content-Type: message/rfc822` header field and a blank line.

        Raises:
            CircularReferenceError: If the content is already being written
            TypeError: If `content` is not a `MessageContent`
        """
        if not isinstance(content, MessageContent):
            raise TypeError(
                f"Expected a MessageContent, got {type(content).__name__}"
            )

        with self._visiting(content):
            if nested and content.nested_content_type:
                self.write_header_field("Content-Type", content.nested_content_type)
                self.write_line()

            content.write_mime(self)


class MessageContent:
    """
    (Abstract) superclass of all message contents.

    Subclasses override `write_mime` to write their MIME representation through
    a `MimeWriter`.
    """

    # Content type announcing this content when it is nested in another one
    nested_content_type = None

    def __init__(self):
        self.node_id = uuid.uuid4().hex

    def write_mime(self, writer: MimeWriter):
        """Write the MIME representation of the content through `writer`."""
        raise AbstractContentError(
            f"{type(self).__name__} does not implement write_mime()"
        )

    def write(self, sink, **kwargs):
        """
        Write the MIME representation of the content to `sink`, a text or
        binary stream or a `MimeWriter`.

        The `linesep` and `encoding` options only apply to streams. Passing
        them along with a writer raises a `ValueError`.
        """
        writer = MimeWriter.get(sink, **kwargs)
        logger.debug("Writing %s %s", type(self).__name__, self.node_id)
        writer.write_content(self, nested=writer.depth > 0)

    def as_string(self, linesep: Optional[str] = None) -> str:
        """Return the MIME representation of the content as a string."""
        buffer = io.StringIO()
        self.write(buffer, linesep=linesep)
        return buffer.getvalue()

    def as_bytes(
        self, linesep: Optional[str] = None, encoding: Optional[str] = None
    ) -> bytes:
        """Return the MIME representation of the content as bytes."""
        buffer = io.BytesIO()
        self.write(buffer, linesep=linesep, encoding=encoding)
        return buffer.getvalue()

    def __str__(self):
        return self.as_string()
