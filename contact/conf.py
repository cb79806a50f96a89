"""
Contact Form Configuration

Collects the CONTACT_* settings into one immutable object so the pipeline
can be built and tested without touching django.conf directly.
"""
from dataclasses import dataclass
from typing import Optional

from django.conf import settings


@dataclass(frozen=True)
class ContactFormConfig:
    """Deployment-level knobs for the contact form pipeline."""

    webhook_url: str = ''
    webhook_timeout: Optional[float] = 10
    phone_country_code: str = '+998'
    name_max_length: int = 100
    message_max_length: int = 500
    require_consent: bool = True
    require_contact_method: bool = True
    accept_international_phone: bool = True
    rate_limit_max_submissions: int = 5
    rate_limit_window_seconds: int = 600
    rate_limit_store_key: str = 'contact_submissions'
    default_language: str = 'ru'
    privacy_policy_url: str = ''
    trusted_proxy_count: int = 0

    @classmethod
    def from_settings(cls):
        """Build the configuration from Django settings."""
        defaults = cls()
        return cls(
            webhook_url=getattr(settings, 'CONTACT_WEBHOOK_URL', defaults.webhook_url) or '',
            webhook_timeout=getattr(settings, 'CONTACT_WEBHOOK_TIMEOUT', defaults.webhook_timeout),
            phone_country_code=getattr(settings, 'CONTACT_PHONE_COUNTRY_CODE', defaults.phone_country_code),
            name_max_length=getattr(settings, 'CONTACT_NAME_MAX_LENGTH', defaults.name_max_length),
            message_max_length=getattr(settings, 'CONTACT_MESSAGE_MAX_LENGTH', defaults.message_max_length),
            require_consent=getattr(settings, 'CONTACT_REQUIRE_CONSENT', defaults.require_consent),
            require_contact_method=getattr(
                settings, 'CONTACT_REQUIRE_CONTACT_METHOD', defaults.require_contact_method
            ),
            accept_international_phone=getattr(
                settings, 'CONTACT_ACCEPT_INTERNATIONAL_PHONE', defaults.accept_international_phone
            ),
            rate_limit_max_submissions=getattr(
                settings, 'CONTACT_RATE_LIMIT_MAX_SUBMISSIONS', defaults.rate_limit_max_submissions
            ),
            rate_limit_window_seconds=getattr(
                settings, 'CONTACT_RATE_LIMIT_WINDOW_SECONDS', defaults.rate_limit_window_seconds
            ),
            rate_limit_store_key=getattr(
                settings, 'CONTACT_RATE_LIMIT_STORE_KEY', defaults.rate_limit_store_key
            ),
            default_language=getattr(settings, 'CONTACT_DEFAULT_LANGUAGE', defaults.default_language),
            privacy_policy_url=getattr(settings, 'CONTACT_PRIVACY_POLICY_URL', defaults.privacy_policy_url),
            trusted_proxy_count=getattr(settings, 'CONTACT_TRUSTED_PROXY_COUNT', defaults.trusted_proxy_count),
        )
