"""
Input Sanitization for Contact Form

Cleans raw field input before it enters the form state. Applied on every
change, so every function here is idempotent.
"""
import re

FREE_TEXT = 'free_text'
EMAIL = 'email'
PHONE = 'phone'

# National subscriber number length (without country code)
PHONE_DIGITS = 9

FORBIDDEN_CHARACTERS = '<>[]{}\'"\\/|;:='

_forbidden_re = re.compile('[' + re.escape(FORBIDDEN_CHARACTERS) + ']')
_email_disallowed_re = re.compile(r'[^A-Za-z0-9_@.+\-]')
_non_digit_re = re.compile(r'[^0-9]')

FIELD_CLASSES = {
    'name': FREE_TEXT,
    'message': FREE_TEXT,
    'email': EMAIL,
    'phone': PHONE,
}


def sanitize_text(value):
    """Strip structurally dangerous characters and trim."""
    return _forbidden_re.sub('', value or '').strip()


def sanitize_email(value):
    """Keep only characters allowed in an email address and trim."""
    return _email_disallowed_re.sub('', value or '').strip()


def sanitize_phone(value):
    """Keep decimal digits only, truncated to the subscriber number length."""
    return _non_digit_re.sub('', value or '')[:PHONE_DIGITS]


_SANITIZERS = {
    FREE_TEXT: sanitize_text,
    EMAIL: sanitize_email,
    PHONE: sanitize_phone,
}


def sanitize(field_class, raw):
    """
    Sanitize a raw value according to its field class.

    Args:
        field_class: One of FREE_TEXT, EMAIL or PHONE
        raw: Raw user input (None is treated as empty)

    Returns:
        str: Clean value safe to store and transmit

    Raises:
        ValueError: If the field class is unknown
    """
    try:
        sanitizer = _SANITIZERS[field_class]
    except KeyError:
        raise ValueError(f"Unknown field class: {field_class}")
    return sanitizer(raw)


def sanitize_field(field, raw):
    """Sanitize a raw value for a named form field."""
    try:
        field_class = FIELD_CLASSES[field]
    except KeyError:
        raise ValueError(f"Unknown contact form field: {field}")
    return sanitize(field_class, raw)
