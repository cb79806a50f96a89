"""
Tests for contact form system checks.
"""
from contact.checks import check_contact_form_settings


def check_ids():
    return [message.id for message in check_contact_form_settings(None)]


class TestContactFormChecks:

    def test_test_settings_pass(self):
        assert check_contact_form_settings(None) == []

    def test_missing_webhook_warns(self, settings):
        settings.CONTACT_WEBHOOK_URL = ''
        assert check_ids() == ['contact.W001']

    def test_name_length_too_small(self, settings):
        settings.CONTACT_NAME_MAX_LENGTH = 1
        assert check_ids() == ['contact.E001']

    def test_message_length_too_small(self, settings):
        settings.CONTACT_MESSAGE_MAX_LENGTH = 1
        assert check_ids() == ['contact.E002']

    def test_bad_rate_limit(self, settings):
        settings.CONTACT_RATE_LIMIT_MAX_SUBMISSIONS = 0
        assert check_ids() == ['contact.E003']

    def test_negative_proxy_count(self, settings):
        settings.CONTACT_TRUSTED_PROXY_COUNT = -1
        assert check_ids() == ['contact.E005']

    def test_unknown_default_language(self, settings):
        settings.CONTACT_DEFAULT_LANGUAGE = 'de'
        assert check_ids() == ['contact.E004']
