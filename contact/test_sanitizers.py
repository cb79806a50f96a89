"""
Tests for input sanitization and phone display formatting.
"""
import pytest

from contact.phone import format_phone, national_digits, with_country_code
from contact.sanitizers import (
    EMAIL,
    FORBIDDEN_CHARACTERS,
    FREE_TEXT,
    PHONE,
    sanitize,
    sanitize_email,
    sanitize_field,
    sanitize_phone,
    sanitize_text,
)


class TestSanitizeText:

    def test_strips_every_forbidden_character(self):
        raw = f"Hello {FORBIDDEN_CHARACTERS} world"
        clean = sanitize_text(raw)

        assert not any(char in clean for char in FORBIDDEN_CHARACTERS)
        assert clean == 'Hello  world'

    def test_script_tag_is_defused(self):
        assert sanitize_text('<script>alert("x")</script>') == 'scriptalert(x)script'

    def test_trims_but_keeps_interior_whitespace(self):
        assert sanitize_text('  Line one\nLine  two  ') == 'Line one\nLine  two'

    def test_keeps_unicode_letters(self):
        assert sanitize_text('Алишер Навоий') == 'Алишер Навоий'

    def test_none_becomes_empty(self):
        assert sanitize_text(None) == ''

    @pytest.mark.parametrize('raw', ['Hi <b>there</b>', "it's a {test}", 'a=b; c:d | e/f\\g'])
    def test_idempotent(self, raw):
        once = sanitize_text(raw)
        assert sanitize_text(once) == once


class TestSanitizeEmail:

    def test_keeps_allowed_characters_only(self):
        assert sanitize_email(' john.doe+news@mail.example.com ') == 'john.doe+news@mail.example.com'

    def test_removes_spaces_quotes_and_brackets(self):
        assert sanitize_email('jo hn"<x>@mail.com') == 'johnx@mail.com'

    def test_drops_non_ascii_letters(self):
        assert sanitize_email('пример@mail.ru') == '@mail.ru'

    def test_idempotent(self):
        once = sanitize_email('"Weird" <user@host.com>')
        assert sanitize_email(once) == once


class TestSanitizePhone:

    def test_digits_only(self):
        assert sanitize_phone('(99) 123-45-67') == '991234567'

    def test_truncates_to_nine_digits(self):
        assert sanitize_phone('99 123 45 67 89') == '991234567'

    def test_formatted_display_value_round_trips_to_digits(self):
        assert sanitize_phone(format_phone('991234567')) == '991234567'

    def test_result_is_all_digits_and_short(self):
        clean = sanitize_phone('+998 (90) 12a3-45-67 ext. 9')
        assert clean.isdigit()
        assert len(clean) <= 9


class TestSanitizeDispatch:

    def test_field_classes(self):
        assert sanitize(FREE_TEXT, 'a<b') == 'ab'
        assert sanitize(EMAIL, 'a b@c.d') == 'ab@c.d'
        assert sanitize(PHONE, 'x1y2') == '12'

    def test_field_names_map_to_classes(self):
        assert sanitize_field('name', ' <Ali> ') == 'Ali'
        assert sanitize_field('message', 'x;y') == 'xy'
        assert sanitize_field('email', 'a@b.co ') == 'a@b.co'
        assert sanitize_field('phone', '99-1') == '991'

    def test_unknown_field_class_rejected(self):
        with pytest.raises(ValueError):
            sanitize('html', 'x')

    def test_unknown_field_rejected(self):
        with pytest.raises(ValueError):
            sanitize_field('website', 'x')


class TestFormatPhone:

    @pytest.mark.parametrize('digits, expected', [
        ('', ''),
        ('9', '9'),
        ('99', '99'),
        ('991', '99 1'),
        ('9912', '99 12'),
        ('99123', '99 123'),
        ('991234', '99 123 4'),
        ('9912345', '99 123 45'),
        ('99123456', '99 123 45 6'),
        ('991234567', '99 123 45 67'),
    ])
    def test_grouping(self, digits, expected):
        assert format_phone(digits) == expected

    def test_ignores_non_digits(self):
        assert format_phone('99 123 45 67') == '99 123 45 67'

    def test_with_country_code(self):
        assert with_country_code('991234567', '+998') == '+998 99 123 45 67'

    def test_with_country_code_empty(self):
        assert with_country_code('', '+998') == ''

    def test_international_digits_lose_prefix(self):
        assert national_digits('998991234567', '+998') == '991234567'
        assert with_country_code('998991234567', '+998') == '+998 99 123 45 67'

    def test_national_digits_untouched(self):
        assert national_digits('991234567', '+998') == '991234567'
