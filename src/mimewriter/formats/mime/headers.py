"""
Header field formatting and folding.

This module turns typed header values (dates, mailboxes, lists, text) and
optional parameters into a single logical header field, and folds long fields
into physical lines as described in RFC 5322, section 2.2.3.
"""

import datetime
from email.utils import format_datetime
from typing import Any, Dict, List, Optional

from django.utils import timezone

from .encoder import encoded_word
from .mailbox import Mailbox

# Fields shorter than this are written on a single line
MAX_UNFOLDED_LENGTH = 79

# Distance from the last fold point after which a field is folded
FOLD_WIDTH = 77

# Priority of folding whitespace, keyed by the preceding character
FOLD_PRIORITIES = {";": 3, ",": 2}
DEFAULT_FOLD_PRIORITY = 1


def format_date(value: datetime.date) -> str:
    """
    Format a date or date-time according to RFC 5322, section 3.3
    ("%a, %d %b %Y %H:%M:%S %z", English day and month names).

    Naive date-times are taken as UTC, plain dates as midnight UTC.

    Examples:
        >>> format_date(datetime.datetime(2017, 1, 1, 1))
        'Sun, 01 Jan 2017 01:00:00 +0000'
    """
    if not isinstance(value, datetime.datetime):
        value = datetime.datetime.combine(value, datetime.time())
    if timezone.is_naive(value):
        value = timezone.make_aware(value, datetime.timezone.utc)
    return format_datetime(value)


def format_header_value(value: Any, charset: Optional[str] = None) -> str:
    """
    Return the MIME representation of a header field value.

    Non-ASCII text is written as encoded-words in `charset`
    (default: `MIME_DEFAULT_CHARSET`).
    """
    if isinstance(value, datetime.date):
        return format_date(value)

    if isinstance(value, Mailbox):
        return value.to_string(encoded=True, charset=charset)

    if isinstance(value, (list, tuple)):
        # e.g. mailbox list
        return ", ".join(
            element.to_string(encoded=True, charset=charset)
            if isinstance(element, Mailbox)
            else str(element)
            for element in value
        )

    result = str(value)
    if not result.isascii():
        result = encoded_word(result, charset)
    return result


def format_param_value(value: Any) -> str:
    """
    Return the representation of a header field parameter value, quoted when
    needed.

    A value starting with a double quote is always quoted. Only the first
    embedded double quote is escaped.
    """
    if isinstance(value, datetime.date):
        value = format_date(value)
    else:
        value = str(value)

    if value.startswith('"'):
        value = value[1:]
        if value.endswith('"'):
            value = value[:-1]
        quote = True
    else:
        quote = " " in value or ";" in value

    value = value.replace('"', '\\"', 1)

    if quote:
        return f'"{value}"'
    return value


def build_header_field(
    name: str, value: Any, params: Optional[Dict[str, Any]] = None
) -> Optional[str]:
    """
    Build a logical header field line from its name, value and parameters.

    Returns None when the name is empty or the value is missing. Parameters
    with a None value are left out.

    Examples:
        >>> build_header_field("Content-Type", "text/plain", {"charset": "utf-8"})
        'Content-Type: text/plain; charset=utf-8'
    """
    if not name or value is None:
        return None

    header_field = f"{name}: {format_header_value(value)}"

    for param_name, param_value in (params or {}).items():
        if param_value is None:
            continue
        header_field += f"; {param_name}={format_param_value(param_value)}"

    return header_field


def fold_header_field(header_field: str) -> List[str]:
    """
    Fold a header field into physical lines.

    Fields are broken before a space, preferring spaces that follow a
    semicolon, then a comma, then any other space. Continuation lines start
    with the folding space. A field without folding whitespace is left long.
    """
    if len(header_field) < MAX_UNFOLDED_LENGTH:
        return [header_field]

    lines = []
    start_at = 0
    fwsp = {}

    for index, char in enumerate(header_field):
        if char == " " and index > 0:
            priority = FOLD_PRIORITIES.get(
                header_field[index - 1], DEFAULT_FOLD_PRIORITY
            )
            fwsp[priority] = index

        if index - start_at > FOLD_WIDTH and fwsp:
            break_before = fwsp[max(fwsp)]
            lines.append(header_field[start_at:break_before])
            start_at = break_before
            fwsp.clear()

    remainder = header_field[start_at:]
    if remainder.strip():
        lines.append(remainder)

    return lines
