import pytest

from gatehouse.auth.validators import validate_email, validate_password


@pytest.mark.parametrize("value", ["a@b.com", "first.last@example.co.uk", "x+tag@sub.domain.io"])
def test_validate_email_accepts_basic_shape(value):
    assert validate_email(value)


@pytest.mark.parametrize("value", ["not-an-email", "a@b", "a b@c.com", "a@@b.com", "@b.com", "", "a@b.com\n", None, 42])
def test_validate_email_rejects(value):
    assert not validate_email(value)


@pytest.mark.parametrize("value", ["Abc123", "Passw0rd!", "aB3@$!%*?&"])
def test_validate_password_accepts(value):
    assert validate_password(value)


@pytest.mark.parametrize(
    "value",
    [
        "abc123",  # no uppercase
        "ABCDEF",  # no lowercase, no digit
        "Abcdef",  # no digit
        "Ab1",  # too short
        "Abc123#",  # '#' outside the allowed set
        "Abc 123",  # space outside the allowed set
        "Abc١٢٣x",  # non-ASCII digits do not count
        "",
        None,
    ],
)
def test_validate_password_rejects(value):
    assert not validate_password(value)
