# backend/tests/test_validation.py
import pytest

from userapi.services.users.validation import validate_email, validate_password, validate_username


@pytest.mark.parametrize(
    "username, expected",
    [
        (None, "username_not_null"),
        ("", "username_not_null"),
        ("abc", "username_size"),
        ("abcd", None),
        ("a" * 32, None),
        ("a" * 33, "username_size"),
    ],
)
def test_validate_username(username, expected):
    assert validate_username(username) == expected


@pytest.mark.parametrize(
    "email, expected",
    [
        (None, "email_not_null"),
        ("", "email_not_null"),
        ("user1@mail.com", None),
        ("first.last@sub.mail.is", None),
        ("mail.com", "email_not_valid"),
        ("user@mail", "email_not_valid"),
        ("user @mail.com", "email_not_valid"),
        ("@mail.com", "email_not_valid"),
        ("a@b..c", "email_not_valid"),
        ("user@-bad-.com", "email_not_valid"),
        ("x@y.z", "email_not_valid"),
        ("a..b@mail.com", "email_not_valid"),
        ("a@mail..com", "email_not_valid"),
        (".user@mail.com", "email_not_valid"),
        ("user@mail.com.", "email_not_valid"),
        ("user@@mail.com", "email_not_valid"),
        ("user+tag@mail.co", None),
    ],
)
def test_validate_email(email, expected):
    assert validate_email(email) == expected


@pytest.mark.parametrize(
    "password, expected",
    [
        (None, "password_not_null"),
        ("", "password_not_null"),
        ("P4ssw", "password_size"),
        ("P4ssword", None),
        ("alllowercase", "password_pattern"),
        ("ALLUPPERCASE", "password_pattern"),
        ("1234567890", "password_pattern"),
        ("lowerand5667", "password_pattern"),
        ("UPPER44444", "password_pattern"),
    ],
)
def test_validate_password(password, expected):
    assert validate_password(password) == expected
