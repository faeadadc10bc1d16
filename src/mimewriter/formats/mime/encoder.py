"""
Transfer encodings for MIME bodies and header text.

This module provides the stateless encoding primitives used by the writer:
base64 and quoted-printable for message bodies (RFC 2045) and Q-encoded
encoded-words for non-ASCII header text (RFC 2047). All functions return
physical lines (or a single header token) without line separators.
"""

import base64
from typing import List, Optional, Union

from mimewriter.conf import get_setting

# Number of input bytes per base64 line (45 bytes -> 60 characters)
BASE64_LINE_BYTES = 45

# Maximum length of a quoted-printable line, soft-break marker included
QUOTED_PRINTABLE_LINE_LENGTH = 78

# Maximum length of an encoded-word is 75; 68 - len(charset) leaves room for
# the "=?", "?Q?" and "?=" delimiters
ENCODED_WORD_LENGTH = 68

CR = 13
LF = 10
TAB = 9
SPACE = 32


def _to_bytes(data: Union[str, bytes], charset: Optional[str]) -> bytes:
    if isinstance(data, str):
        return data.encode(charset or get_setting("MIME_DEFAULT_CHARSET"))
    return bytes(data)


def hex_escape(byte: int) -> str:
    """Return the `=XX` escape of `byte`."""
    return f"={byte:02X}"


def base64_lines(
    data: Optional[Union[str, bytes]], charset: Optional[str] = None
) -> List[str]:
    """
    Return the base64 representation of `data` as a list of lines.

    Examples:
        >>> base64_lines("Lorem ipsum")
        ['TG9yZW0gaXBzdW0=']
        >>> base64_lines("")
        []
    """
    if not data:
        return []

    raw = _to_bytes(data, charset)
    return [
        base64.b64encode(raw[i : i + BASE64_LINE_BYTES]).decode("ascii")
        for i in range(0, len(raw), BASE64_LINE_BYTES)
    ]


def _is_qp_literal(byte: int) -> bool:
    # printable characters '!'..'~', except '='
    return 33 <= byte <= 60 or 62 <= byte <= 126


def quoted_printable_lines(
    data: Optional[Union[str, bytes]], charset: Optional[str] = None
) -> List[str]:
    """
    Return the quoted-printable representation of `data` as a list of lines.

    Line breaks of the input (LF, CR or CRLF) end the current line. Long lines
    are wrapped with soft line breaks so that no line exceeds 78 characters.

    Examples:
        >>> quoted_printable_lines("Lorem ipsum")
        ['Lorem ipsum']
        >>> quoted_printable_lines("")
        ['']
    """
    if data is None:
        return []

    raw = _to_bytes(data, charset)
    lines = []
    buffer = ""

    for index, byte in enumerate(raw):
        char = ""

        if byte in (CR, LF):
            # LF following a CR belongs to the same line break
            if not (byte == LF and index > 0 and raw[index - 1] == CR):
                lines.append(buffer)
                buffer = ""

        elif byte in (TAB, SPACE):
            following = raw[index + 1] if index + 1 < len(raw) else None
            if following is None or following in (CR, LF):
                char = hex_escape(byte)
            else:
                char = chr(byte)

        elif _is_qp_literal(byte):
            char = chr(byte)

        else:
            char = hex_escape(byte)

        if len(buffer) >= QUOTED_PRINTABLE_LINE_LENGTH - len(char):
            lines.append(buffer + "=")
            buffer = ""
        buffer += char

    lines.append(buffer)
    return lines


def _is_q_literal(byte: int) -> bool:
    # printable characters '!'..'~', except '=', '?' and '_'
    return 33 <= byte <= 126 and byte not in (61, 63, 95)


def encoded_word(text: Optional[str], charset: Optional[str] = None) -> str:
    """
    Return the encoded-word representation of `text` in "Q" encoding.

    Text that does not fit into a single encoded-word is split into several
    words. A split happens at the last encoded space of the word when there
    is one, the space becoming the separator between the words.

    Examples:
        >>> encoded_word("Thomas Müller")
        '=?utf-8?Q?Thomas=20M=C3=BCller?='
    """
    if not text:
        return ""

    charset = (charset or get_setting("MIME_DEFAULT_CHARSET")).lower()
    max_word_length = ENCODED_WORD_LENGTH - len(charset)
    buffer = ""
    result = ""

    for byte in _to_bytes(text, charset):
        char = chr(byte) if _is_q_literal(byte) else hex_escape(byte)

        if len(buffer) + len(char) > max_word_length:
            index = buffer.rfind("=20")
            if index != -1:
                chunk = buffer[:index]
                buffer = buffer[index + 3 :]
                separator = " "
            else:
                # no encoded space to split at, words follow each other
                # without a separator
                chunk = buffer
                buffer = ""
                separator = ""
            result += f"=?{charset}?Q?{chunk}?={separator}"
        buffer += char

    return result + f"=?{charset}?Q?{buffer}?="
