"""
Settings access for the mimewriter application.

Values are read from the Django settings when they are configured, so a
project can override them in its settings module. Outside of a configured
Django project the defaults below apply.
"""

from django.conf import settings

DEFAULTS = {
    # Charset of text bodies and of RFC 2047 encoded-words
    "MIME_DEFAULT_CHARSET": "utf-8",
    # Line separator written after every physical line
    "MIME_LINE_SEPARATOR": "\n",
    # Encoding used when writing to binary sinks
    "MIME_OUTPUT_ENCODING": "utf-8",
}


def get_setting(name):
    """Return the value of the mimewriter setting `name`."""
    default = DEFAULTS[name]
    if not settings.configured:
        return default
    return getattr(settings, name, default)
