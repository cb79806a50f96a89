"""
Contact Webhook Client

Forwards accepted contact form submissions to the configured webhook
(for example a Google Apps Script endpoint).

The webhook contract is minimal: a URL-encoded POST whose response body is
exactly "OK" when the submission was stored. Anything else is a failure.
"""
import logging

import requests

from .exceptions import TransportError

logger = logging.getLogger(__name__)

SUCCESS_SENTINEL = 'OK'


class WebhookSubmitClient:
    """
    Service for posting contact form payloads to the webhook.

    Usage:
        client = WebhookSubmitClient(url, timeout=10)
        client.submit({'name': 'Ali', 'message': 'Hello', 'device': 'Windows PC'})
    """

    def __init__(self, url, timeout=10):
        self.url = url
        self.timeout = timeout

        if not self.url:
            logger.warning(
                "CONTACT_WEBHOOK_URL is not set. "
                "Contact form submissions will fail!"
            )

    @classmethod
    def from_config(cls, config):
        return cls(config.webhook_url, timeout=config.webhook_timeout)

    def submit(self, payload):
        """
        Post a payload to the webhook.

        Args:
            payload: Flat dict of form fields, sent URL-encoded

        Raises:
            TransportError: If the request failed or the webhook did not
                answer with the success sentinel
        """
        if not self.url:
            raise TransportError("Contact webhook URL not configured")

        try:
            response = requests.post(
                self.url,
                data=payload,
                timeout=self.timeout
            )
        except requests.exceptions.Timeout:
            logger.error("Contact webhook timeout")
            raise TransportError("Webhook request timed out")
        except requests.exceptions.RequestException as e:
            logger.error(f"Contact webhook network error: {e}")
            raise TransportError(f"Webhook request failed: {e}")

        body = response.text
        if body != SUCCESS_SENTINEL:
            logger.error(
                f"Contact webhook rejected submission: status {response.status_code}, "
                f"body {body[:200]!r}"
            )
            raise TransportError(f"Webhook answered {response.status_code}")

        logger.info("Contact submission accepted by webhook")
