"""mimewriter: compose RFC 5322 / MIME messages from a tree of content nodes."""

__version__ = "1.0.0"
