"""
Message contents.

This module provides the content nodes a MIME message is built from:

- `PlainContent`: a textual or binary body with its transfer encoding
- `CompositeContent`: a multipart body made of other contents
- `AdvancedContent`: a content with a disposition (e.g. a file attachment)
- `Message`: header fields and a content; also nestable as `message/rfc822`

Example:
    >>> from mimewriter.formats.mime import Mailbox, Message, PlainContent
    >>> message = Message(PlainContent.textual("Lorem ipsum dolor sit amet, ..."))
    >>> message["From"] = Mailbox("a.smith@foo.bar", "Allison Smith")
    >>> message["To"] = Mailbox("t.mueller@bar.foo", "Thomas Müller")
    >>> message["Subject"] = "Welcome Thomas"
    >>> print(message.as_string(), end="")
    MIME-Version: 1.0
    From: Allison Smith <a.smith@foo.bar>
    To: =?utf-8?Q?Thomas=20M=C3=BCller?= <t.mueller@bar.foo>
    Subject: Welcome Thomas
    Content-Type: text/plain; charset=utf-8
    Content-Transfer-Encoding: quoted-printable
    <BLANKLINE>
    Lorem ipsum dolor sit amet, ...
"""

import datetime
import logging
import re
from typing import Any, Dict, Iterator, List, Optional, Union

from mimewriter.conf import get_setting
from mimewriter.enums import (
    UNENCODED_TRANSFER_ENCODINGS,
    DispositionTypeChoices,
    TransferEncodingChoices,
)

from .encoder import base64_lines, quoted_printable_lines
from .errors import UnsupportedEncodingError
from .writer import MessageContent, MimeWriter

logger = logging.getLogger(__name__)

LINE_BREAK_RE = re.compile(rb"\r\n|\r|\n")


class PlainContent(MessageContent):
    """
    A textual or binary message content.

    Produces, for `PlainContent("Lorem ipsum ...", "text/plain", "quoted-printable")`:

        Content-Type: text/plain; charset=utf-8
        Content-Transfer-Encoding: quoted-printable

        Lorem ipsum ...

    The encoded body is computed on the first write and reused until the
    content, transfer encoding or charset changes.

    See RFC 2045 for details about formatting message bodies.
    """

    def __init__(
        self,
        content: Optional[Union[str, bytes]],
        content_type: str,
        transfer_encoding: str,
        charset: Optional[str] = None,
    ):
        super().__init__()
        self._content = content
        self.content_type = content_type
        self._transfer_encoding = transfer_encoding
        self._charset = charset or get_setting("MIME_DEFAULT_CHARSET")
        self._encoded_content = None

    @classmethod
    def textual(cls, text, content_type="text/plain", charset=None):
        """Create a quoted-printable content from `text`."""
        return cls(
            text, content_type, TransferEncodingChoices.QUOTED_PRINTABLE, charset
        )

    @classmethod
    def binary(cls, data, content_type="application/octet-stream"):
        """Create a base64 content from `data`."""
        return cls(data, content_type, TransferEncodingChoices.BASE64)

    @property
    def content(self):
        """The textual or binary content."""
        return self._content

    @content.setter
    def content(self, content):
        self._content = content
        self._encoded_content = None

    @property
    def transfer_encoding(self):
        """The transfer encoding, e.g. `"7bit"`, `"base64"` or `"quoted-printable"`."""
        return self._transfer_encoding

    @transfer_encoding.setter
    def transfer_encoding(self, transfer_encoding):
        self._transfer_encoding = transfer_encoding
        self._encoded_content = None

    @property
    def charset(self):
        """The charset of textual content."""
        return self._charset

    @charset.setter
    def charset(self, charset):
        self._charset = charset
        self._encoded_content = None

    @property
    def size(self) -> Optional[int]:
        """The size of the content in bytes, None without content."""
        if self._content is None:
            return None
        if isinstance(self._content, str):
            return len(self._content.encode(self._charset))
        return len(self._content)

    def _encode(self) -> List[Union[str, bytes]]:
        try:
            encoding = TransferEncodingChoices(str(self._transfer_encoding).lower())
        except ValueError as e:
            logger.error(
                "Unsupported content transfer encoding %r for %s",
                self._transfer_encoding,
                self.node_id,
            )
            raise UnsupportedEncodingError(
                f"Unsupported content transfer encoding: {self._transfer_encoding}"
            ) from e

        if encoding in UNENCODED_TRANSFER_ENCODINGS:
            # written as is, in the charset of the content
            data = self._content
            if isinstance(data, str):
                data = data.encode(self._charset)
            lines = LINE_BREAK_RE.split(bytes(data))
            if len(lines) > 1 and not lines[-1]:
                lines.pop()
            return lines
        if encoding == TransferEncodingChoices.QUOTED_PRINTABLE:
            return quoted_printable_lines(self._content, self._charset)
        return base64_lines(self._content, self._charset)

    def encoded_content(self) -> List[Union[str, bytes]]:
        """
        Return the body lines in the transfer encoding.

        Lines of `identity`, `7bit` and `8bit` bodies are the raw bytes of the
        content in its charset.

        Raises:
            UnsupportedEncodingError: If the transfer encoding is unknown
        """
        if self._content is None:
            return []

        if self._encoded_content is None:
            logger.debug(
                "Encoding content %s as %s", self.node_id, self._transfer_encoding
            )
            self._encoded_content = self._encode()
        return self._encoded_content

    def write_mime(self, writer: MimeWriter):
        lines = self.encoded_content()

        # `Content-Type` header field
        params = {}
        if str(self.content_type or "").startswith("text/"):
            params["charset"] = self._charset.lower()
        writer.write_header_field("Content-Type", self.content_type, params)

        # `Content-Transfer-Encoding` header field
        writer.write_header_field(
            "Content-Transfer-Encoding", self._transfer_encoding
        )

        # blank line
        writer.write_line()

        # body
        for line in lines:
            writer.write_line(line, charset=self._charset)


class CompositeContent(MessageContent):
    """
    A message content consisting of multiple parts.

    Produces, for a "mixed" composite with the boundary "boundary":

        Content-Type: multipart/mixed; boundary="=_boundary"

        --=_boundary
        ...first part...
        --=_boundary
        ...second part...
        --=_boundary--

    Without a boundary, one is derived from the node ID on the first write.
    The boundary must not occur in the output of any part.

    See RFC 2046, section 5.1, for further information about multiparts.
    """

    def __init__(  # pylint: disable=redefined-builtin
        self, type="mixed", boundary=None, *parts
    ):
        super().__init__()
        self.type = type
        self.boundary = boundary
        self.parts = list(parts)

    def __getitem__(self, index):
        return self.parts[index]

    def __setitem__(self, index, part):
        self.parts[index] = part

    def __len__(self):
        return len(self.parts)

    def __iter__(self) -> Iterator[MessageContent]:
        return iter(self.parts)

    def append(self, content: MessageContent):
        """Append `content` as the last part."""
        self.parts.append(content)

    def write_mime(self, writer: MimeWriter):
        if not self.boundary:
            self.boundary = self.node_id
        boundary = f"=_{self.boundary}"

        # `Content-Type` header field
        writer.write_header_field(
            "Content-Type", f"multipart/{self.type}", {"boundary": f'"{boundary}'}
        )

        # blank line
        writer.write_line()

        # parts
        for part in self.parts:
            writer.write_line(f"--{boundary}")
            writer.write_content(part)
        writer.write_line(f"--{boundary}--")


class AdvancedContent(MessageContent):
    """
    A message content with a disposition, typically a file attachment.

    Produces, for
    `AdvancedContent(PlainContent.binary(b"Lorem ipsum dolor sit amet, ..."),
    filename="foo.bar")`:

        Content-Disposition: attachment; filename=foo.bar; size=31
        Content-Type: application/octet-stream
        Content-Transfer-Encoding: base64

        TG9yZW0gaXBzdW0gZG9sb3Igc2l0IGFtZXQsIC4uLg==

    The wrapped content writes its own header fields.

    See RFC 2183 for details about the `Content-Disposition` header field.
    """

    def __init__(
        self,
        content: MessageContent,
        disposition_type: str = DispositionTypeChoices.ATTACHMENT,
        filename: Optional[str] = None,
        creation_date: Optional[datetime.datetime] = None,
        modification_date: Optional[datetime.datetime] = None,
        read_date: Optional[datetime.datetime] = None,
        content_id: Optional[str] = None,
    ):
        super().__init__()
        self.content = content
        self.disposition_type = disposition_type or DispositionTypeChoices.ATTACHMENT
        self.filename = filename
        self.creation_date = creation_date
        self.modification_date = modification_date
        self.read_date = read_date
        self.content_id = content_id

    @property
    def size(self) -> Optional[int]:
        """The size of the wrapped content in bytes, when known."""
        return getattr(self.content, "size", None)

    def write_mime(self, writer: MimeWriter):
        # `Content-ID` header field
        writer.write_header_field("Content-ID", self.content_id)

        # `Content-Disposition` header field
        params = {
            "filename": self.filename,
            "creation-date": self.creation_date,
            "modification-date": self.modification_date,
            "read-date": self.read_date,
            "size": self.size,
        }
        writer.write_header_field(
            "Content-Disposition", str(self.disposition_type), params
        )

        # content
        writer.write_content(self.content)


class Message(MessageContent):
    """
    A message: header fields and an optional content.

    Header fields are written in insertion order after `MIME-Version`. Setting
    an existing field replaces its value in place.

    A message used as the content of another one is written as
    `message/rfc822`.

    See RFC 5322 for details about the format of messages.
    """

    nested_content_type = "message/rfc822"

    def __init__(
        self,
        content: Optional[MessageContent] = None,
        headers: Optional[Dict[str, Any]] = None,
    ):
        super().__init__()
        self.content = content
        self.headers = dict(headers or {})

    def __getitem__(self, name):
        return self.headers[name]

    def __setitem__(self, name, value):
        self.headers[name] = value

    def __delitem__(self, name):
        del self.headers[name]

    def __contains__(self, name):
        return name in self.headers

    def append(self, content: MessageContent):
        """
        Append `content` to the message.

        A single existing content is replaced by a "mixed" composite holding
        both the existing and the new content.
        """
        if self.content is None:
            self.content = content
        elif isinstance(self.content, CompositeContent):
            self.content.append(content)
        else:
            self.content = CompositeContent("mixed", None, self.content, content)

    def write_mime(self, writer: MimeWriter):
        # header fields
        writer.write_header_field("MIME-Version", "1.0")

        for name, value in self.headers.items():
            writer.write_header_field(name, value)

        # content
        if self.content is not None:
            writer.write_content(self.content)
