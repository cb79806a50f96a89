"""
Contact Form Submission Session

State machine that owns one contact form: it keeps the sanitized form state,
validates on submit, applies the rate limit, fingerprints the device,
forwards the payload to the webhook and exposes the resulting status and
field errors.

States:
    editing -> validating -> (rate_limited | invalid | submitting)
    submitting -> (success | submit_error)
    rate_limited, invalid, submit_error -> editing
    success -> editing (explicit reset)

All failures are recoverable. The form is kept on failure so the user can
retry, and cleared (including consent) on success.
"""
import logging
from dataclasses import dataclass, asdict

from django.db import models

from .client import WebhookSubmitClient
from .conf import ContactFormConfig
from .device import DeviceFingerprinter
from .exceptions import StatusTransitionError, TransportError
from .phone import format_phone, with_country_code
from .rate_limiting import InMemorySubmissionStore, RateLimiter
from .sanitizers import sanitize_field
from .translations import get_catalog
from .validators import validate

logger = logging.getLogger(__name__)


class SubmissionState(models.TextChoices):
    EDITING = 'editing', 'Editing'
    VALIDATING = 'validating', 'Validating'
    RATE_LIMITED = 'rate_limited', 'Rate limited'
    INVALID = 'invalid', 'Invalid'
    SUBMITTING = 'submitting', 'Submitting'
    SUCCESS = 'success', 'Success'
    SUBMIT_ERROR = 'submit_error', 'Submit error'


SUBMISSION_TRANSITIONS = {
    SubmissionState.EDITING: [SubmissionState.VALIDATING],
    SubmissionState.VALIDATING: [
        SubmissionState.RATE_LIMITED,
        SubmissionState.INVALID,
        SubmissionState.SUBMITTING,
    ],
    SubmissionState.RATE_LIMITED: [SubmissionState.EDITING],
    SubmissionState.INVALID: [SubmissionState.EDITING],
    SubmissionState.SUBMITTING: [SubmissionState.SUCCESS, SubmissionState.SUBMIT_ERROR],
    SubmissionState.SUBMIT_ERROR: [SubmissionState.EDITING],
    SubmissionState.SUCCESS: [SubmissionState.EDITING],
}

FORM_FIELDS = ('name', 'email', 'phone', 'message')


@dataclass
class FormState:
    name: str = ''
    email: str = ''
    message: str = ''
    phone: str = ''
    consent: bool = False

    def as_dict(self):
        return asdict(self)


def validate_status_transition(current_status, new_status):
    """
    Validate that a submission state transition is allowed.

    Raises:
        StatusTransitionError if transition is invalid
    """
    valid_transitions = SUBMISSION_TRANSITIONS.get(current_status, [])
    if new_status not in valid_transitions:
        raise StatusTransitionError(
            f"Invalid submission state transition: {current_status} -> {new_status}. "
            f"Valid transitions: {[str(state) for state in valid_transitions]}"
        )
    return True


class ContactFormSession:
    """
    One contact form from first keystroke to successful submission.

    Usage:
        session = ContactFormSession(config, client=client, limiter=limiter)
        session.update_field('name', raw_name)
        session.set_consent(True)
        state = session.submit(signals)
        if state == SubmissionState.SUCCESS:
            ...
        else:
            session.errors  # {'email': '...', 'submit': '...'}
    """

    def __init__(self, config=None, client=None, limiter=None, fingerprinter=None, messages=None):
        self.config = config or ContactFormConfig.from_settings()
        self.client = client or WebhookSubmitClient.from_config(self.config)
        self.limiter = limiter or RateLimiter(
            InMemorySubmissionStore(),
            max_submissions=self.config.rate_limit_max_submissions,
            window_seconds=self.config.rate_limit_window_seconds,
        )
        self.fingerprinter = fingerprinter or DeviceFingerprinter()
        self.messages = messages or get_catalog().messages(self.config.default_language)

        self.form = FormState()
        self.errors = {}
        self.state = SubmissionState.EDITING
        self.outcome = None

    def _transition(self, new_state):
        validate_status_transition(self.state, new_state)
        logger.debug(f"Contact form state {self.state} -> {new_state}")
        self.state = new_state

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def update_field(self, field, raw):
        """
        Sanitize and store a field value.

        Clears the error for that field only.

        Returns:
            str: The stored (sanitized) value
        """
        if field not in FORM_FIELDS:
            raise ValueError(f"Unknown contact form field: {field}")
        value = sanitize_field(field, raw)
        if getattr(self.form, field) != value:
            self.errors.pop(field, None)
        setattr(self.form, field, value)
        return value

    def set_consent(self, value):
        self.form.consent = bool(value)
        if self.form.consent:
            self.errors.pop('consent', None)

    @property
    def display_phone(self):
        """Phone digits grouped for display (never stored)."""
        return format_phone(self.form.phone)

    @property
    def is_submitting(self):
        return self.state == SubmissionState.SUBMITTING

    @property
    def can_submit(self):
        """Whether the submit action should be enabled in the interface."""
        if self.is_submitting:
            return False
        return self.form.consent or not self.config.require_consent

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    def build_payload(self, device_label):
        """
        Assemble the webhook payload from the current form.

        phone is only included when present; device is always included.
        """
        payload = {
            'name': self.form.name,
            'email': self.form.email or '',
            'message': self.form.message,
        }
        if self.form.phone:
            payload['phone'] = with_country_code(self.form.phone, self.config.phone_country_code)
        payload['device'] = device_label or self.fingerprinter.fallback
        return payload

    def _fail(self, outcome, errors):
        self._transition(outcome)
        self.outcome = outcome
        self.errors = errors
        self._transition(SubmissionState.EDITING)
        return self.state

    def submit(self, signals=None):
        """
        Validate and send the form.

        Args:
            signals: DeviceSignals for the submitting client (optional)

        Returns:
            SubmissionState: SUCCESS, or EDITING with errors populated.
            Returns SUBMITTING unchanged if a submission is already in flight.
        """
        if self.is_submitting:
            logger.warning("Ignoring contact form submit while another is in flight")
            return self.state

        self._transition(SubmissionState.VALIDATING)

        errors = validate(self.form, self.config, self.messages)
        if self.limiter.is_limited():
            errors['submit'] = self.messages['error_rate_limited']
            logger.info("Contact form submission blocked by rate limit")
            return self._fail(SubmissionState.RATE_LIMITED, errors)

        if errors:
            logger.debug(f"Contact form invalid: {sorted(errors)}")
            return self._fail(SubmissionState.INVALID, errors)

        self.errors = {}
        self._transition(SubmissionState.SUBMITTING)

        device_label = self.fingerprinter.classify(signals)
        payload = self.build_payload(device_label)

        try:
            self.client.submit(payload)
            self.limiter.record()
        except TransportError as e:
            logger.warning(f"Contact form submission failed: {e}")
            return self._fail(
                SubmissionState.SUBMIT_ERROR,
                {'submit': self.messages['error_send_failed']}
            )
        except Exception:
            # Never leave the session in SUBMITTING
            logger.exception("Unexpected error while submitting contact form")
            return self._fail(
                SubmissionState.SUBMIT_ERROR,
                {'submit': self.messages['error_send_failed']}
            )

        self.form = FormState()
        self.errors = {}
        self._transition(SubmissionState.SUCCESS)
        self.outcome = SubmissionState.SUCCESS
        logger.info(f"Contact form submitted (device: {device_label})")
        return self.state

    def reset(self):
        """Return from the success screen to an empty form."""
        self._transition(SubmissionState.EDITING)
        self.form = FormState()
        self.errors = {}
        self.outcome = None
