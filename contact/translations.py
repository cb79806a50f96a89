"""
Contact Form Translations

Display strings for the contact form in every supported language.

Every language table must define every key in MESSAGE_KEYS. Tables are
checked once when the catalog is built, so a missing key fails at startup
instead of at render time. Unknown language codes fall back to the default
language.
"""
from functools import lru_cache
from types import MappingProxyType

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

MESSAGE_KEYS = (
    'name_label',
    'email_label',
    'phone_label',
    'message_label',
    'consent_label',
    'privacy_policy_link',
    'submit_button',
    'sending_button',
    'success_title',
    'success_body',
    'send_again',
    'error_name',
    'error_email',
    'error_phone',
    'error_message',
    'error_contact_required',
    'error_consent',
    'error_rate_limited',
    'error_send_failed',
)

# Language selector entries, in display order
LANGUAGES = (
    {'code': 'ru', 'name': 'RU', 'flag': '🇷🇺'},
    {'code': 'en', 'name': 'EN', 'flag': '🇺🇸'},
    {'code': 'uz', 'name': 'UZ', 'flag': '🇺🇿'},
)

FORM_TRANSLATIONS = {
    'ru': {
        'name_label': 'Ваше имя',
        'email_label': 'Email',
        'phone_label': 'Телефон',
        'message_label': 'Сообщение',
        'consent_label': 'Я согласен на обработку персональных данных',
        'privacy_policy_link': 'Политика конфиденциальности',
        'submit_button': 'Отправить сообщение',
        'sending_button': 'Отправка...',
        'success_title': 'Сообщение отправлено!',
        'success_body': 'Мы свяжемся с вами в ближайшее время.',
        'send_again': 'Отправить ещё одно сообщение',
        'error_name': 'Имя должно содержать от 2 до {max_length} символов',
        'error_email': 'Введите корректный email',
        'error_phone': 'Введите номер телефона полностью',
        'error_message': 'Сообщение должно содержать от 2 до {max_length} символов',
        'error_contact_required': 'Укажите email или телефон для связи',
        'error_consent': 'Необходимо согласие на обработку данных',
        'error_rate_limited': 'Слишком много сообщений. Попробуйте позже.',
        'error_send_failed': 'Не удалось отправить сообщение. Попробуйте ещё раз.',
    },
    'en': {
        'name_label': 'Your name',
        'email_label': 'Email',
        'phone_label': 'Phone',
        'message_label': 'Message',
        'consent_label': 'I agree to the processing of my personal data',
        'privacy_policy_link': 'Privacy policy',
        'submit_button': 'Send message',
        'sending_button': 'Sending...',
        'success_title': 'Message sent!',
        'success_body': 'We will get back to you shortly.',
        'send_again': 'Send another message',
        'error_name': 'Name must be between 2 and {max_length} characters',
        'error_email': 'Enter a valid email address',
        'error_phone': 'Enter the full phone number',
        'error_message': 'Message must be between 2 and {max_length} characters',
        'error_contact_required': 'Provide an email or a phone number',
        'error_consent': 'Please accept the data processing terms',
        'error_rate_limited': 'Too many messages. Please try again later.',
        'error_send_failed': 'Could not send your message. Please try again.',
    },
    'uz': {
        'name_label': 'Ismingiz',
        'email_label': 'Email',
        'phone_label': 'Telefon',
        'message_label': 'Xabar',
        'consent_label': "Shaxsiy ma'lumotlarimni qayta ishlashga roziman",
        'privacy_policy_link': 'Maxfiylik siyosati',
        'submit_button': 'Xabar yuborish',
        'sending_button': 'Yuborilmoqda...',
        'success_title': 'Xabar yuborildi!',
        'success_body': "Tez orada siz bilan bog'lanamiz.",
        'send_again': 'Yana xabar yuborish',
        'error_name': "Ism 2 dan {max_length} gacha belgidan iborat bo'lishi kerak",
        'error_email': "To'g'ri email kiriting",
        'error_phone': "Telefon raqamini to'liq kiriting",
        'error_message': "Xabar 2 dan {max_length} gacha belgidan iborat bo'lishi kerak",
        'error_contact_required': 'Email yoki telefon raqamini kiriting',
        'error_consent': "Ma'lumotlarni qayta ishlashga rozilik bering",
        'error_rate_limited': "Juda ko'p xabar yuborildi. Keyinroq urinib ko'ring.",
        'error_send_failed': "Xabarni yuborib bo'lmadi. Qaytadan urinib ko'ring.",
    },
}


class TranslationCatalog:
    """
    Complete, read-only translation tables with a default language.

    Usage:
        catalog = TranslationCatalog(FORM_TRANSLATIONS, default_language='ru')
        t = catalog.messages('en-US')
        t['submit_button']  # 'Send message'
    """

    def __init__(self, tables, default_language):
        if default_language not in tables:
            raise ImproperlyConfigured(
                f"Default contact form language '{default_language}' has no translation table"
            )

        incomplete = {}
        for code, table in tables.items():
            missing = [key for key in MESSAGE_KEYS if not table.get(key)]
            if missing:
                incomplete[code] = missing
        if incomplete:
            details = '; '.join(f"{code}: {', '.join(keys)}" for code, keys in incomplete.items())
            raise ImproperlyConfigured(f"Incomplete contact form translations ({details})")

        self.default_language = default_language
        self._tables = {
            code: MappingProxyType(dict(table)) for code, table in tables.items()
        }

    def resolve(self, language):
        """
        Map a language selector to a supported code.

        Accepts region-qualified codes ('en-US', 'uz_UZ') and falls back
        to the default language for anything unrecognized.
        """
        code = (language or '').strip().lower().replace('_', '-')
        if code in self._tables:
            return code
        base = code.split('-', 1)[0]
        if base in self._tables:
            return base
        return self.default_language

    def messages(self, language=None):
        """Return the full message table for a language selector."""
        return self._tables[self.resolve(language)]


@lru_cache(maxsize=None)
def _build_catalog(default_language):
    return TranslationCatalog(FORM_TRANSLATIONS, default_language)


def get_catalog():
    """Return the catalog for the configured default language."""
    return _build_catalog(getattr(settings, 'CONTACT_DEFAULT_LANGUAGE', 'ru'))
