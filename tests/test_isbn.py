import pytest

from bookreview.utils.isbn import format_isbn13, isbn13_check_digit, parse_isbn13


def test_valid_isbn_is_parsed_to_integer():
    assert parse_isbn13("9780747542155") == 9780747542155
    assert parse_isbn13("9780306406157") == 9780306406157


def test_bad_checksum_is_rejected():
    assert parse_isbn13("9780306406158") is None
    assert parse_isbn13("9780747542156") is None


def test_exactly_one_check_digit_completes_a_prefix():
    for prefix in ("978074754215", "978030640615", "000000000000", "123456789012"):
        accepted = [d for d in range(10) if parse_isbn13(f"{prefix}{d}") is not None]
        assert accepted == [isbn13_check_digit(prefix)]


def test_leading_zeros_are_kept_in_value():
    assert parse_isbn13("0000000000000") == 0
    assert format_isbn13(0) == "0000000000000"


@pytest.mark.parametrize(
    "text",
    [
        "",
        "978074754215",
        "97807475421550",
        "978-0747542155",
        "978074754215x",
        " 978074754215",
        "٩780747542155",
        "9780747542155\n",
    ],
)
def test_malformed_input_is_rejected(text):
    assert parse_isbn13(text) is None


def test_check_digit_rejects_bad_prefix():
    with pytest.raises(ValueError):
        isbn13_check_digit("97807475421")
    with pytest.raises(ValueError):
        isbn13_check_digit("97807475421a")


def test_format_round_trips_parse():
    assert format_isbn13(parse_isbn13("9780747542155")) == "9780747542155"
    with pytest.raises(ValueError):
        format_isbn13(10**13)
