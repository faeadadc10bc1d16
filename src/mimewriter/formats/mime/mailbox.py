"""
Mailbox value used in originator and destination header fields.

See RFC 5322, section 3.4, for details about mailboxes.
"""

from typing import Optional

from .encoder import encoded_word


class Mailbox:
    """
    An email address (addr-spec) with an optional display name.

    Examples:
        >>> str(Mailbox("a.smith@foo.bar", "Allison Smith"))
        'Allison Smith <a.smith@foo.bar>'
        >>> Mailbox("t.mueller@bar.foo", "Thomas Müller").to_string(encoded=True)
        '=?utf-8?Q?Thomas=20M=C3=BCller?= <t.mueller@bar.foo>'
    """

    def __init__(
        self, email_address: Optional[str], display_name: Optional[str] = None
    ):
        self.email_address = email_address
        self.display_name = display_name

    def to_string(
        self, encoded: bool = False, charset: Optional[str] = None
    ) -> str:
        """
        Return the mailbox as `display-name <addr-spec>`, or the bare addr-spec
        when there is no display name.

        With `encoded`, a non-ASCII display name is written as an encoded-word
        in `charset`.
        """
        display_name = self.display_name or ""
        addr_spec = self.email_address or ""

        if not display_name:
            return addr_spec

        if encoded and not display_name.isascii():
            display_name = encoded_word(display_name, charset)

        result = f"{display_name} "
        if not addr_spec.startswith("<"):
            result += "<"
        result += addr_spec
        if not addr_spec.endswith(">"):
            result += ">"
        return result

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        return f"Mailbox({self.email_address!r}, {self.display_name!r})"

    def __eq__(self, other):
        if not isinstance(other, Mailbox):
            return NotImplemented
        return (self.email_address, self.display_name) == (
            other.email_address,
            other.display_name,
        )

    def __hash__(self):
        return hash((self.email_address, self.display_name))
