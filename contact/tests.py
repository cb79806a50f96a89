"""
Tests for the Contact Form API and webhook client
"""
from unittest.mock import Mock, patch
from urllib.parse import urlencode

import pytest
import requests
from django.urls import reverse
from rest_framework import status

from contact.client import WebhookSubmitClient
from contact.exceptions import TransportError

WINDOWS_UA = (
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
    '(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36'
)


def webhook_response(text='OK', status_code=200):
    return Mock(text=text, status_code=status_code)


@pytest.fixture
def submit_url():
    return reverse('contact:submit')


@pytest.fixture
def valid_data():
    return {
        'name': 'Aziz Karimov',
        'email': 'aziz@example.com',
        'phone': '99 123 45 67',
        'message': 'We need a landing page for our product.',
        'consent': True,
        'lang': 'en',
    }


@pytest.fixture
def mock_post():
    with patch('contact.client.requests.post') as mocked:
        mocked.return_value = webhook_response()
        yield mocked


class TestContactFormMetadata:
    """Tests for GET /api/contact/form"""

    def test_default_language(self, api_client):
        response = api_client.get(reverse('contact:form'))

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data['language'] == 'ru'
        assert data['messages']['submit_button'] == 'Отправить сообщение'
        assert data['phone_country_code'] == '+998'
        assert data['phone_placeholder'] == 'XX XXX XX XX'
        assert data['message_max_length'] == 500
        assert data['require_consent'] is True
        assert [entry['code'] for entry in data['languages']] == ['ru', 'en', 'uz']

    def test_requested_language(self, api_client):
        response = api_client.get(reverse('contact:form'), {'lang': 'en-GB'})

        data = response.json()
        assert data['language'] == 'en'
        assert data['messages']['submit_button'] == 'Send message'

    def test_unknown_language_falls_back(self, api_client):
        response = api_client.get(reverse('contact:form'), {'lang': 'fr'})
        assert response.json()['language'] == 'ru'


class TestContactFormSubmit:
    """Tests for POST /api/contact/submit"""

    def test_successful_submission(self, api_client, submit_url, valid_data, mock_post):
        response = api_client.post(submit_url, valid_data, format='json', HTTP_USER_AGENT=WINDOWS_UA)

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data['success'] is True
        assert data['state'] == 'success'
        assert data['message'] == 'Message sent!'

        mock_post.assert_called_once()
        args, kwargs = mock_post.call_args
        assert args == ('https://hooks.example.com/contact',)
        assert kwargs['data'] == {
            'name': 'Aziz Karimov',
            'email': 'aziz@example.com',
            'message': 'We need a landing page for our product.',
            'phone': '+998 99 123 45 67',
            'device': 'Windows PC',
        }
        assert kwargs['timeout'] == 10

    def test_form_encoded_submission(self, api_client, submit_url, valid_data, mock_post):
        response = api_client.post(
            submit_url, urlencode(valid_data), content_type='application/x-www-form-urlencoded'
        )
        assert response.status_code == status.HTTP_201_CREATED

    def test_markup_is_stripped_before_sending(self, api_client, submit_url, valid_data, mock_post):
        valid_data['name'] = '<b>Aziz</b>'
        valid_data['message'] = 'Hello <script>alert("x")</script>'

        response = api_client.post(submit_url, valid_data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        sent = mock_post.call_args.kwargs['data']
        assert sent['name'] == 'bAzizb'
        assert sent['message'] == 'Hello scriptalert(x)script'

    def test_client_hints_refine_device(self, api_client, submit_url, valid_data, mock_post):
        valid_data.update({
            'pixel_ratio': 3,
            'screen_width': 390,
            'screen_height': 844,
        })
        ua = (
            'Mozilla/5.0 (iPhone; CPU iPhone OS 17_4 like Mac OS X) AppleWebKit/605.1.15 '
            '(KHTML, like Gecko) Version/17.4 Mobile/15E148 Safari/604.1'
        )

        api_client.post(submit_url, valid_data, format='json', HTTP_USER_AGENT=ua)

        assert mock_post.call_args.kwargs['data']['device'] == 'iPhone 12 / 13 / 14 (iOS)'

    def test_missing_user_agent_is_unknown_device(self, api_client, submit_url, valid_data, mock_post):
        api_client.post(submit_url, valid_data, format='json')
        assert mock_post.call_args.kwargs['data']['device'] == 'Unknown device'

    def test_invalid_fields_return_errors_and_form(self, api_client, submit_url, valid_data, mock_post):
        valid_data['name'] = 'A'
        valid_data['email'] = 'not-an-email'

        response = api_client.post(submit_url, valid_data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        data = response.json()
        assert data['success'] is False
        assert data['state'] == 'editing'
        assert data['outcome'] == 'invalid'
        assert data['errors']['name'] == 'Name must be between 2 and 100 characters'
        assert data['errors']['email'] == 'Enter a valid email address'
        assert data['form']['email'] == 'not-an-email'
        assert data['form']['phone'] == '991234567'
        assert data['form']['phone_display'] == '99 123 45 67'
        assert data['can_submit'] is True
        mock_post.assert_not_called()

    def test_no_contact_method(self, api_client, submit_url, valid_data, mock_post):
        valid_data['email'] = ''
        valid_data['phone'] = ''

        response = api_client.post(submit_url, valid_data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        errors = response.json()['errors']
        assert errors['email'] == errors['phone']
        mock_post.assert_not_called()

    def test_consent_required(self, api_client, submit_url, valid_data, mock_post):
        valid_data.pop('consent')

        response = api_client.post(submit_url, valid_data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        data = response.json()
        assert 'consent' in data['errors']
        assert data['can_submit'] is False
        mock_post.assert_not_called()

    def test_errors_use_default_language(self, api_client, submit_url, valid_data, mock_post):
        valid_data.pop('lang')
        valid_data.pop('consent')

        response = api_client.post(submit_url, valid_data, format='json')

        assert response.json()['errors']['consent'] == 'Необходимо согласие на обработку данных'

    def test_malformed_request(self, api_client, submit_url, valid_data, mock_post):
        valid_data['screen_width'] = 'wide'

        response = api_client.post(submit_url, valid_data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        data = response.json()
        assert data['error'] == 'Validation failed'
        assert 'screen_width' in data['fields']
        mock_post.assert_not_called()

    def test_rate_limit_after_five_submissions(self, api_client, submit_url, valid_data, mock_post):
        for _ in range(5):
            response = api_client.post(submit_url, valid_data, format='json')
            assert response.status_code == status.HTTP_201_CREATED

        response = api_client.post(submit_url, valid_data, format='json')

        assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
        data = response.json()
        assert data['outcome'] == 'rate_limited'
        assert data['errors']['submit'] == 'Too many messages. Please try again later.'
        assert 0 < data['retry_after'] <= 600
        assert response['Retry-After'] == str(data['retry_after'])
        assert mock_post.call_count == 5

    def test_rate_limit_is_per_client(self, api_client, submit_url, valid_data, mock_post):
        for _ in range(5):
            api_client.post(submit_url, valid_data, format='json', REMOTE_ADDR='10.0.0.1')

        response = api_client.post(submit_url, valid_data, format='json', REMOTE_ADDR='10.0.0.2')

        assert response.status_code == status.HTTP_201_CREATED

    def test_spoofed_forwarded_for_does_not_reset_limit(self, api_client, submit_url, valid_data, mock_post):
        codes = [
            api_client.post(
                submit_url, valid_data, format='json', HTTP_X_FORWARDED_FOR=f"203.0.113.{i}"
            ).status_code
            for i in range(8)
        ]

        assert codes == [status.HTTP_201_CREATED] * 5 + [status.HTTP_429_TOO_MANY_REQUESTS] * 3
        assert mock_post.call_count == 5

    def test_forwarded_for_used_behind_trusted_proxy(self, api_client, submit_url, valid_data, mock_post,
                                                     settings):
        settings.CONTACT_TRUSTED_PROXY_COUNT = 1
        for _ in range(5):
            api_client.post(submit_url, valid_data, format='json', HTTP_X_FORWARDED_FOR='203.0.113.1')

        blocked = api_client.post(submit_url, valid_data, format='json', HTTP_X_FORWARDED_FOR='203.0.113.1')
        other = api_client.post(submit_url, valid_data, format='json', HTTP_X_FORWARDED_FOR='203.0.113.2')

        assert blocked.status_code == status.HTTP_429_TOO_MANY_REQUESTS
        assert other.status_code == status.HTTP_201_CREATED

    def test_failed_submissions_do_not_count(self, api_client, submit_url, valid_data, mock_post):
        mock_post.return_value = webhook_response(text='ERROR', status_code=500)
        for _ in range(5):
            api_client.post(submit_url, valid_data, format='json')

        mock_post.return_value = webhook_response()
        response = api_client.post(submit_url, valid_data, format='json')

        assert response.status_code == status.HTTP_201_CREATED

    def test_webhook_rejection(self, api_client, submit_url, valid_data, mock_post):
        mock_post.return_value = webhook_response(text='Script error', status_code=200)

        response = api_client.post(submit_url, valid_data, format='json')

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        data = response.json()
        assert data['outcome'] == 'submit_error'
        assert data['errors'] == {'submit': 'Could not send your message. Please try again.'}
        assert data['form']['name'] == 'Aziz Karimov'
        assert data['form']['consent'] is True

    def test_webhook_unreachable(self, api_client, submit_url, valid_data, mock_post):
        mock_post.side_effect = requests.exceptions.ConnectionError('refused')

        response = api_client.post(submit_url, valid_data, format='json')

        assert response.status_code == status.HTTP_502_BAD_GATEWAY

    def test_webhook_not_configured(self, api_client, submit_url, valid_data, mock_post, settings):
        settings.CONTACT_WEBHOOK_URL = ''

        response = api_client.post(submit_url, valid_data, format='json')

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        mock_post.assert_not_called()


class TestWebhookSubmitClient:

    def test_ok_body_accepted(self, mock_post):
        WebhookSubmitClient('https://hooks.example.com/contact', timeout=5).submit({'name': 'Ali'})

        mock_post.assert_called_once_with(
            'https://hooks.example.com/contact', data={'name': 'Ali'}, timeout=5
        )

    @pytest.mark.parametrize('text', ['', 'ok', 'OK\n', 'ERROR', '<html>Error</html>'])
    def test_anything_but_ok_is_failure(self, mock_post, text):
        mock_post.return_value = webhook_response(text=text)

        with pytest.raises(TransportError):
            WebhookSubmitClient('https://hooks.example.com/contact').submit({'name': 'Ali'})

    def test_timeout(self, mock_post):
        mock_post.side_effect = requests.exceptions.Timeout()

        with pytest.raises(TransportError, match='timed out'):
            WebhookSubmitClient('https://hooks.example.com/contact').submit({'name': 'Ali'})

    def test_missing_url(self, mock_post):
        with pytest.raises(TransportError):
            WebhookSubmitClient('').submit({'name': 'Ali'})
        mock_post.assert_not_called()
