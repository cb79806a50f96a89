"""
Tests for submit-time contact form validation.
"""
from dataclasses import replace

import pytest

from contact.session import FormState
from contact.validators import is_valid_email, is_valid_phone, validate


@pytest.fixture
def valid_form():
    return FormState(
        name='Aziz',
        email='aziz@example.com',
        message='Hello, I would like a website.',
        phone='991234567',
        consent=True,
    )


class TestEmailRule:

    @pytest.mark.parametrize('value', ['a@b.co', 'john.doe+x@mail.example.uz'])
    def test_valid(self, value):
        assert is_valid_email(value)

    @pytest.mark.parametrize('value', ['a@b', 'a.b.co', '@b.co', 'a@@b.co', 'a@b.', ''])
    def test_invalid(self, value):
        assert not is_valid_email(value)


class TestPhoneRule:

    def test_nine_digits(self):
        assert is_valid_phone('123456789')

    @pytest.mark.parametrize('value', ['12345', '12345678', '1234567890', '99 123 45', ''])
    def test_invalid(self, value):
        assert not is_valid_phone(value)

    def test_international_form_when_enabled(self):
        assert is_valid_phone('998991234567', country_code='+998', accept_international=True)

    def test_international_form_needs_matching_country_code(self):
        assert not is_valid_phone('997991234567', country_code='+998', accept_international=True)

    def test_international_form_rejected_when_disabled(self):
        assert not is_valid_phone('998991234567', country_code='+998', accept_international=False)


class TestValidate:

    def test_valid_form_has_no_errors(self, valid_form, config, messages):
        assert validate(valid_form, config, messages) == {}

    def test_name_of_one_character_rejected(self, valid_form, config, messages):
        errors = validate(replace(valid_form, name='A'), config, messages)
        assert errors == {'name': messages['error_name'].format(max_length=100)}

    def test_name_of_two_characters_accepted(self, valid_form, config, messages):
        assert 'name' not in validate(replace(valid_form, name='Al'), config, messages)

    def test_name_upper_bound(self, valid_form, config, messages):
        assert 'name' not in validate(replace(valid_form, name='a' * 100), config, messages)
        assert 'name' in validate(replace(valid_form, name='a' * 101), config, messages)

    def test_message_bounds_follow_configuration(self, valid_form, config, messages):
        assert 'message' in validate(replace(valid_form, message='x'), config, messages)
        assert 'message' not in validate(replace(valid_form, message='x' * 500), config, messages)
        assert 'message' in validate(replace(valid_form, message='x' * 501), config, messages)

        long_config = replace(config, message_max_length=1000)
        assert 'message' not in validate(replace(valid_form, message='x' * 1000), long_config, messages)

    def test_invalid_email(self, valid_form, config, messages):
        errors = validate(replace(valid_form, email='a@b'), config, messages)
        assert errors == {'email': messages['error_email']}

    def test_empty_email_allowed_when_phone_given(self, valid_form, config, messages):
        assert validate(replace(valid_form, email=''), config, messages) == {}

    def test_short_phone(self, valid_form, config, messages):
        errors = validate(replace(valid_form, phone='12345'), config, messages)
        assert errors == {'phone': messages['error_phone']}

    def test_empty_phone_allowed_when_email_given(self, valid_form, config, messages):
        assert validate(replace(valid_form, phone=''), config, messages) == {}

    def test_missing_contact_method_flags_both_fields(self, valid_form, config, messages):
        errors = validate(replace(valid_form, email='', phone=''), config, messages)

        assert errors['email'] == messages['error_contact_required']
        assert errors['phone'] == messages['error_contact_required']

    def test_contact_method_rule_can_be_disabled(self, valid_form, config, messages):
        relaxed = replace(config, require_contact_method=False)
        assert validate(replace(valid_form, email='', phone=''), relaxed, messages) == {}

    def test_missing_consent(self, valid_form, config, messages):
        errors = validate(replace(valid_form, consent=False), config, messages)
        assert errors == {'consent': messages['error_consent']}

    def test_consent_rule_can_be_disabled(self, valid_form, config, messages):
        relaxed = replace(config, require_consent=False)
        assert validate(replace(valid_form, consent=False), relaxed, messages) == {}

    def test_all_failures_collected_in_one_pass(self, config, messages):
        errors = validate(FormState(name='A', email='bad', phone='1', message=''), config, messages)
        assert set(errors) == {'name', 'message', 'email', 'phone', 'consent'}
