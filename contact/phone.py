"""
Phone Number Display Formatting

Pure helpers that turn the stored raw subscriber digits into the grouped
national pattern shown to the user. Nothing here mutates form state.
"""
import re

from .sanitizers import PHONE_DIGITS

PHONE_PLACEHOLDER = 'XX XXX XX XX'

_non_digit_re = re.compile(r'\D')


def format_phone(value):
    """
    Group subscriber digits for display.

    Examples:
        '99'        -> '99'
        '9912'      -> '99 12'
        '991234'    -> '99 123 4'
        '991234567' -> '99 123 45 67'
    """
    d = _non_digit_re.sub('', value or '')[:PHONE_DIGITS]
    if len(d) <= 2:
        return d
    if len(d) <= 5:
        return f"{d[:2]} {d[2:]}"
    if len(d) <= 7:
        return f"{d[:2]} {d[2:5]} {d[5:]}"
    return f"{d[:2]} {d[2:5]} {d[5:7]} {d[7:]}"


def country_code_digits(country_code):
    """Return the digits of a country code such as '+998'."""
    return _non_digit_re.sub('', country_code or '')


def national_digits(digits, country_code):
    """Drop a leading country code from a full international number."""
    prefix = country_code_digits(country_code)
    if prefix and len(digits) == len(prefix) + PHONE_DIGITS and digits.startswith(prefix):
        return digits[len(prefix):]
    return digits


def with_country_code(digits, country_code):
    """
    Render subscriber digits with the national prefix.

    Returns an empty string when there are no digits, so callers can
    skip the phone field entirely.
    """
    formatted = format_phone(national_digits(digits or '', country_code))
    if not formatted:
        return ''
    return f"{country_code} {formatted}"
