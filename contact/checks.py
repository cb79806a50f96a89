"""
Contact Form System Checks

Reported by `manage.py check` and on server start.
"""
from django.core.checks import Error, Warning, register

from .conf import ContactFormConfig
from .translations import FORM_TRANSLATIONS, get_catalog


@register()
def check_contact_form_settings(app_configs, **kwargs):
    errors = []
    config = ContactFormConfig.from_settings()

    if not config.webhook_url:
        errors.append(Warning(
            "CONTACT_WEBHOOK_URL is not set",
            hint="Contact form submissions will fail until a webhook URL is configured.",
            id='contact.W001',
        ))

    if config.name_max_length < 2:
        errors.append(Error(
            "CONTACT_NAME_MAX_LENGTH must be at least 2",
            id='contact.E001',
        ))

    if config.message_max_length < 2:
        errors.append(Error(
            "CONTACT_MESSAGE_MAX_LENGTH must be at least 2",
            hint="Typical values are 500 or 1000.",
            id='contact.E002',
        ))

    if config.rate_limit_max_submissions < 1 or config.rate_limit_window_seconds <= 0:
        errors.append(Error(
            "Contact form rate limit must allow at least one submission in a positive window",
            hint="Check CONTACT_RATE_LIMIT_MAX_SUBMISSIONS and CONTACT_RATE_LIMIT_WINDOW_SECONDS.",
            id='contact.E003',
        ))

    if config.trusted_proxy_count < 0:
        errors.append(Error(
            "CONTACT_TRUSTED_PROXY_COUNT must not be negative",
            hint="Use 0 when clients connect directly, 1 behind a single reverse proxy.",
            id='contact.E005',
        ))

    if config.default_language not in FORM_TRANSLATIONS:
        errors.append(Error(
            f"CONTACT_DEFAULT_LANGUAGE '{config.default_language}' has no translation table",
            hint=f"Use one of: {', '.join(FORM_TRANSLATIONS)}.",
            id='contact.E004',
        ))
    else:
        # Builds the catalog, which rejects incomplete tables
        get_catalog()

    return errors
