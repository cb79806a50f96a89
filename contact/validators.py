"""
Contact Form Validation

Submit-time checks for a sanitized form. Nothing here runs per keystroke.
"""
import re

from .phone import country_code_digits
from .sanitizers import PHONE_DIGITS

_email_re = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')

MIN_TEXT_LENGTH = 2


def is_valid_email(value):
    return bool(value and _email_re.match(value))


def is_valid_phone(value, country_code='', accept_international=False):
    """
    Check a raw digit string.

    A national number is exactly PHONE_DIGITS digits. When accept_international
    is set, the same number prefixed with the country code digits also passes.
    """
    if not value or not value.isdigit():
        return False
    if len(value) == PHONE_DIGITS:
        return True
    if accept_international:
        prefix = country_code_digits(country_code)
        return bool(prefix) and len(value) == len(prefix) + PHONE_DIGITS and value.startswith(prefix)
    return False


def _length_ok(value, max_length):
    return MIN_TEXT_LENGTH <= len(value) <= max_length


def validate(form, config, messages):
    """
    Validate a form state in a single pass.

    Args:
        form: FormState with sanitized values
        config: ContactFormConfig
        messages: Translation table for the active language

    Returns:
        dict: Field name -> message. Empty when the form may be submitted.
    """
    errors = {}

    if not _length_ok(form.name, config.name_max_length):
        errors['name'] = messages['error_name'].format(max_length=config.name_max_length)

    if not _length_ok(form.message, config.message_max_length):
        errors['message'] = messages['error_message'].format(max_length=config.message_max_length)

    if form.email and not is_valid_email(form.email):
        errors['email'] = messages['error_email']

    if form.phone and not is_valid_phone(
        form.phone,
        country_code=config.phone_country_code,
        accept_international=config.accept_international_phone,
    ):
        errors['phone'] = messages['error_phone']

    # One shared message on both fields when no contact method is given
    if config.require_contact_method and not form.email and not form.phone:
        errors['email'] = errors['phone'] = messages['error_contact_required']

    if config.require_consent and not form.consent:
        errors['consent'] = messages['error_consent']

    return errors
