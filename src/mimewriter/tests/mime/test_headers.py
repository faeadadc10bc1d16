"""
Tests for header field formatting and folding.
"""

import datetime

import pytest

from mimewriter.formats.mime import Mailbox
from mimewriter.formats.mime.headers import (
    build_header_field,
    fold_header_field,
    format_date,
    format_header_value,
    format_param_value,
)


class TestFormatDate:
    """Tests for RFC 5322 date-time formatting."""

    def test_naive_datetime_is_utc(self):
        """Test formatting a naive date-time."""
        assert (
            format_date(datetime.datetime(2017, 1, 1, 1))
            == "Sun, 01 Jan 2017 01:00:00 +0000"
        )

    def test_aware_datetime_keeps_offset(self):
        """Test formatting a date-time with a UTC offset."""
        value = datetime.datetime(
            2017, 1, 2, 2, 30, tzinfo=datetime.timezone(datetime.timedelta(hours=2))
        )
        assert format_date(value) == "Mon, 02 Jan 2017 02:30:00 +0200"

    def test_date(self):
        """Test formatting a date without time."""
        assert (
            format_date(datetime.date(2017, 2, 1)) == "Wed, 01 Feb 2017 00:00:00 +0000"
        )


class TestFormatHeaderValue:
    """Tests for header field value formatting."""

    def test_text(self):
        """Test that ASCII text is kept as-is."""
        assert format_header_value("Welcome Thomas") == "Welcome Thomas"

    def test_non_ascii_text(self):
        """Test that non-ASCII text becomes an encoded-word."""
        assert format_header_value("Grüße") == "=?utf-8?Q?Gr=C3=BC=C3=9Fe?="

    def test_other_objects(self):
        """Test that other values are converted to strings."""
        assert format_header_value(1.0) == "1.0"

    def test_datetime(self):
        """Test that date-times are formatted according to RFC 5322."""
        value = datetime.datetime(2017, 2, 1, 3, tzinfo=datetime.timezone.utc)
        assert format_header_value(value) == "Wed, 01 Feb 2017 03:00:00 +0000"

    def test_mailbox(self):
        """Test that mailboxes have their display name encoded."""
        mailbox = Mailbox("t.mueller@bar.foo", "Thomas Müller")
        assert (
            format_header_value(mailbox)
            == "=?utf-8?Q?Thomas=20M=C3=BCller?= <t.mueller@bar.foo>"
        )

    def test_list(self):
        """Test that lists are joined with commas."""
        value = [
            Mailbox("a.smith@foo.bar", "Allison Smith"),
            "info@foo.bar",
            Mailbox("t.mueller@bar.foo", "Thomas Müller"),
        ]
        assert format_header_value(value) == (
            "Allison Smith <a.smith@foo.bar>, info@foo.bar, "
            "=?utf-8?Q?Thomas=20M=C3=BCller?= <t.mueller@bar.foo>"
        )

    def test_charset(self):
        """Test that encoded-words use the given charset."""
        mailbox = Mailbox("t.mueller@bar.foo", "Thomas Müller")

        assert format_header_value("Grüße", "ISO-8859-1") == (
            "=?iso-8859-1?Q?Gr=FC=DFe?="
        )
        assert format_header_value([mailbox], "iso-8859-1") == (
            "=?iso-8859-1?Q?Thomas=20M=FCller?= <t.mueller@bar.foo>"
        )


class TestFormatParamValue:
    """Tests for header field parameter values."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("foo.bar", "foo.bar"),
            (3, "3"),
            ("foo bar", '"foo bar"'),
            ("foo;bar", '"foo;bar"'),
            ('"=_boundary', '"=_boundary"'),
            ('"quoted"', '"quoted"'),
            ('say "hi" "there"', '"say \\"hi" "there""'),
            (datetime.datetime(2017, 1, 1, 1), '"Sun, 01 Jan 2017 01:00:00 +0000"'),
        ],
    )
    def test_format_param_value(self, value, expected):
        """Test quoting and escaping of parameter values."""
        assert format_param_value(value) == expected


class TestBuildHeaderField:
    """Tests for building logical header fields."""

    def test_missing_name_or_value(self):
        """Test that fields without name or value are skipped."""
        assert build_header_field("", "value") is None
        assert build_header_field("Subject", None) is None

    def test_without_params(self):
        """Test a field without parameters."""
        assert build_header_field("Subject", "Hello") == "Subject: Hello"

    def test_params_in_order(self):
        """Test that parameters are appended in order, None values skipped."""
        field = build_header_field(
            "Content-Disposition",
            "attachment",
            {"filename": "my file.txt", "creation-date": None, "size": 12},
        )
        assert field == (
            'Content-Disposition: attachment; filename="my file.txt"; size=12'
        )


class TestFoldHeaderField:
    """Tests for header field folding."""

    def test_short_field_not_folded(self):
        """Test that fields shorter than 79 characters are kept on one line."""
        field = "Subject: " + "a " * 34 + "b"
        assert len(field) == 78
        assert fold_header_field(field) == [field]

    def test_semicolon_preferred(self):
        """Test that a space after a semicolon is the preferred fold point."""
        field = "X: " + "a" * 20 + "; " + "b" * 20 + ", " + "c" * 40
        assert fold_header_field(field) == [
            "X: " + "a" * 20 + ";",
            " " + "b" * 20 + ", " + "c" * 40,
        ]

    def test_comma_preferred_over_space(self):
        """Test that a space after a comma beats a later plain space."""
        field = "X: " + "a" * 30 + ", " + "b" * 20 + " " + "c" * 40
        assert fold_header_field(field) == [
            "X: " + "a" * 30 + ",",
            " " + "b" * 20 + " " + "c" * 40,
        ]

    def test_most_recent_space_of_same_priority(self):
        """Test that the latest space of the best priority is chosen."""
        field = "X: " + "a" * 10 + " " + "b" * 10 + " " + "c" * 70
        assert fold_header_field(field) == [
            "X: " + "a" * 10 + " " + "b" * 10,
            " " + "c" * 70,
        ]

    def test_no_folding_whitespace(self):
        """Test that long words are not truncated."""
        field = "X: " + "a" * 100
        assert fold_header_field(field) == ["X:", " " + "a" * 100]

    def test_trailing_whitespace_dropped(self):
        """Test that a whitespace-only remainder is not written."""
        field = "X: " + "a" * 80 + " "
        assert fold_header_field(field) == ["X:", " " + "a" * 80]

    def test_content_disposition(self):
        """Test folding a Content-Disposition field with dates."""
        field = build_header_field(
            "Content-Disposition",
            "attachment",
            {
                "filename": "foo",
                "creation-date": datetime.datetime(2017, 1, 1, 1),
                "modification-date": datetime.datetime(2017, 1, 2, 2),
                "read-date": datetime.datetime(2017, 2, 1, 3),
                "size": 3,
            },
        )
        assert fold_header_field(field) == [
            "Content-Disposition: attachment; filename=foo;",
            ' creation-date="Sun, 01 Jan 2017 01:00:00 +0000";',
            ' modification-date="Mon, 02 Jan 2017 02:00:00 +0000";',
            ' read-date="Wed, 01 Feb 2017 03:00:00 +0000"; size=3',
        ]

    def test_folded_lines_join_back(self):
        """Test that unfolding the lines restores the field."""
        field = "To: " + ", ".join(f"User {i} <user{i}@example.com>" for i in range(10))

        lines = fold_header_field(field)

        assert len(lines) > 1
        assert all(line.startswith(" ") for line in lines[1:])
        assert all(len(line) <= 78 for line in lines)
        assert "".join(lines) == field
