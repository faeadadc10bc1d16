"""
mimewriter enums declaration
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class TransferEncodingChoices(models.TextChoices):
    """Defines the supported values of the Content-Transfer-Encoding field."""

    IDENTITY = "identity", _("Identity")
    SEVEN_BIT = "7bit", _("7bit")
    EIGHT_BIT = "8bit", _("8bit")
    QUOTED_PRINTABLE = "quoted-printable", _("Quoted-printable")
    BASE64 = "base64", _("Base64")


# Encodings whose body is written as-is
UNENCODED_TRANSFER_ENCODINGS = (
    TransferEncodingChoices.IDENTITY,
    TransferEncodingChoices.SEVEN_BIT,
    TransferEncodingChoices.EIGHT_BIT,
)


class DispositionTypeChoices(models.TextChoices):
    """Defines the disposition types of the Content-Disposition field."""

    ATTACHMENT = "attachment", _("Attachment")
    INLINE = "inline", _("Inline")
