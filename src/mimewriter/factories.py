"""
mimewriter factories
"""

import factory.fuzzy
from faker import Faker

from mimewriter.enums import DispositionTypeChoices, TransferEncodingChoices
from mimewriter.formats.mime import (
    AdvancedContent,
    CompositeContent,
    Mailbox,
    Message,
    PlainContent,
)

fake = Faker()


class MailboxFactory(factory.Factory):
    """A factory to random mailboxes for testing purposes."""

    class Meta:
        model = Mailbox

    email_address = factory.Faker("email")
    display_name = factory.Faker("name")


class TextContentFactory(factory.Factory):
    """A factory to random quoted-printable text contents."""

    class Meta:
        model = PlainContent

    content = factory.Faker("paragraph", nb_sentences=5)
    content_type = "text/plain"
    transfer_encoding = TransferEncodingChoices.QUOTED_PRINTABLE


class BinaryContentFactory(factory.Factory):
    """A factory to random base64 binary contents."""

    class Meta:
        model = PlainContent

    content = factory.LazyFunction(lambda: fake.binary(length=256))
    content_type = factory.fuzzy.FuzzyChoice(
        ["application/octet-stream", "application/pdf", "image/png"]
    )
    transfer_encoding = TransferEncodingChoices.BASE64


class AttachmentFactory(factory.Factory):
    """A factory to file attachments wrapping a binary content."""

    class Meta:
        model = AdvancedContent

    content = factory.SubFactory(BinaryContentFactory)
    disposition_type = DispositionTypeChoices.ATTACHMENT
    filename = factory.Faker("file_name")
    creation_date = factory.Faker("date_time")
    modification_date = factory.Faker("date_time")
    read_date = factory.Faker("date_time")


class CompositeContentFactory(factory.Factory):
    """
    A factory to multipart contents.

    Usage: CompositeContentFactory(parts=[part1, part2])
    """

    class Meta:
        model = CompositeContent

    type = "mixed"
    boundary = factory.Sequence(lambda n: f"boundary{n!s}")

    @factory.post_generation
    def parts(self, create, parts, **kwargs):
        """Optionally append parts to the composite."""
        for part in parts or []:
            self.append(part)


class MessageFactory(factory.Factory):
    """A factory to messages with random originator, recipient and subject."""

    class Meta:
        model = Message

    content = factory.SubFactory(TextContentFactory)
    headers = factory.LazyFunction(
        lambda: {
            "From": MailboxFactory(),
            "To": [MailboxFactory(), MailboxFactory()],
            "Subject": fake.sentence(),
        }
    )
