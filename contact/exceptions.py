"""
Contact Form Exceptions

Errors raised by the submission pipeline. Field, consent and rate-limit
failures are reported through the FieldErrors mapping instead.
"""


class ContactFormError(Exception):
    """Base class for contact form pipeline errors."""
    pass


class TransportError(ContactFormError):
    """
    Raised when the webhook could not accept a submission.

    Covers network failures and any response whose body is not the
    success sentinel. The message is meant for logs only.
    """
    pass


class StatusTransitionError(ContactFormError):
    """Raised when an invalid submission state transition is attempted."""
    pass
