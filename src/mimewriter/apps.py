"""mimewriter application"""

from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class MimeWriterConfig(AppConfig):
    """Configuration class for the mimewriter app."""

    name = "mimewriter"
    app_label = "mimewriter"
    verbose_name = _("MIME message writer")
