from directory.utils.phone import (
    dial_uri,
    format_phone_number_for_dial,
    format_phone_number_for_display,
)


def test_dial_strips_tel_scheme_and_returns_e164():
    result = format_phone_number_for_dial("tel:+49 30 1234567", "DE")
    assert result.startswith("+49")


def test_dial_german_landline():
    assert format_phone_number_for_dial("tel:+49 30 123456", "DE") == "+4930123456"


def test_tel_scheme_is_case_insensitive():
    assert format_phone_number_for_dial("  TEL: +49 30 123456 ", "DEU") == "+4930123456"


def test_display_uses_national_format():
    assert format_phone_number_for_display("+1 650-253-0000", "United States") == "(650) 253-0000"


def test_national_number_resolved_with_country_name():
    assert format_phone_number_for_dial("(650) 253-0000", "USA") == "+16502530000"


def test_international_number_missing_plus():
    # Starts with the German calling code but has no leading "+"
    assert format_phone_number_for_dial("4930123456", "DE") == "+4930123456"


def test_double_zero_prefix_is_left_for_the_parser():
    assert format_phone_number_for_dial("0049 30 123456", "DE") == "+4930123456"


def test_unparseable_returns_cleaned_input():
    assert format_phone_number_for_dial("abc", "DE") == "abc"
    assert format_phone_number_for_display("tel:abc", "US") == "abc"


def test_invalid_number_returns_cleaned_input():
    assert format_phone_number_for_display("tel: 123", "US") == "123"


def test_blank_phone():
    assert format_phone_number_for_dial(None, "US") == ""
    assert format_phone_number_for_display("   ", "US") == ""
    assert format_phone_number_for_display("tel:", "US") == ""


def test_dial_uri():
    assert dial_uri("+1 650-253-0000", "US") == "tel:+16502530000"
    assert dial_uri(None, "US") is None
