"""Message formats supported by mimewriter."""
