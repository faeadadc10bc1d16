"""Fixtures and Django settings for the mimewriter tests"""
# pylint: disable=redefined-outer-name

import datetime

import django
from django.conf import settings

import pytest

from mimewriter.formats.mime import (
    AdvancedContent,
    CompositeContent,
    Mailbox,
    Message,
    PlainContent,
)


def pytest_configure():
    """Configure a minimal Django project for the test session."""
    if not settings.configured:
        settings.configure(
            INSTALLED_APPS=["mimewriter"],
            USE_TZ=True,
            TIME_ZONE="UTC",
        )
        django.setup()


@pytest.fixture
def attachment():
    """A binary attachment with a filename and three dates."""
    return AdvancedContent(
        PlainContent.binary("..."),
        filename="foo",
        creation_date=datetime.datetime(2017, 1, 1, 1),
        modification_date=datetime.datetime(2017, 1, 2, 2),
        read_date=datetime.datetime(2017, 2, 1, 3),
    )


@pytest.fixture
def welcome_message(attachment):
    """The welcome message: a text part and an attachment."""
    return Message(
        CompositeContent(
            "mixed",
            "boundary",
            PlainContent.textual("Lorem ipsum dolor sit amet, ..."),
            attachment,
        ),
        {
            "From": Mailbox("a.smith@foo.bar", "Allison Smith"),
            "To": Mailbox("t.mueller@bar.foo", "Thomas Müller"),
            "Subject": "Welcome Thomas",
        },
    )
