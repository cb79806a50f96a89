"""
Contact Form Serializers

Parse the public contact form request. Sanitization and the form rules
live in the submission session so that every entry point goes through
the same pipeline; these serializers only enforce types and hard caps.
"""
from rest_framework import serializers


class ContactFormSubmitSerializer(serializers.Serializer):
    """
    Public contact form submission serializer.

    Carries the raw form fields plus optional client hints used for
    device classification.
    """

    name = serializers.CharField(
        required=False,
        allow_blank=True,
        trim_whitespace=False,
        max_length=1000,
        help_text="Name of the person contacting us"
    )

    email = serializers.CharField(
        required=False,
        allow_blank=True,
        trim_whitespace=False,
        max_length=255,
        help_text="Email address for follow-up (optional if phone is given)"
    )

    phone = serializers.CharField(
        required=False,
        allow_blank=True,
        max_length=50,
        help_text="National phone number, any formatting"
    )

    message = serializers.CharField(
        required=False,
        allow_blank=True,
        trim_whitespace=False,
        max_length=10000,
        help_text="Message content"
    )

    consent = serializers.BooleanField(
        default=False,
        help_text="Consent to personal data processing"
    )

    lang = serializers.CharField(
        required=False,
        allow_blank=True,
        max_length=16,
        help_text="Language selector for error messages"
    )

    # Client hints
    platform = serializers.CharField(required=False, allow_blank=True, max_length=100)
    pixel_ratio = serializers.FloatField(required=False, allow_null=True, min_value=0)
    screen_width = serializers.IntegerField(required=False, allow_null=True, min_value=0)
    screen_height = serializers.IntegerField(required=False, allow_null=True, min_value=0)
    gpu_renderer = serializers.CharField(required=False, allow_blank=True, max_length=255)


class ContactFormMetadataSerializer(serializers.Serializer):
    """
    Everything the frontend needs to render the contact form.
    """

    language = serializers.CharField()
    languages = serializers.ListField(child=serializers.DictField())
    messages = serializers.DictField(child=serializers.CharField())
    phone_country_code = serializers.CharField()
    phone_placeholder = serializers.CharField()
    name_max_length = serializers.IntegerField()
    message_max_length = serializers.IntegerField()
    require_consent = serializers.BooleanField()
    require_contact_method = serializers.BooleanField()
    privacy_policy_url = serializers.CharField(allow_blank=True)
