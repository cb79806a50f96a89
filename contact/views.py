"""
Contact Form Views

Public API endpoints for the marketing site contact form.
"""
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from .client import WebhookSubmitClient
from .conf import ContactFormConfig
from .device import DeviceSignals
from .phone import PHONE_PLACEHOLDER
from .rate_limiting import CacheSubmissionStore, RateLimiter, get_client_ip
from .serializers import ContactFormMetadataSerializer, ContactFormSubmitSerializer
from .session import FORM_FIELDS, ContactFormSession, SubmissionState
from .translations import LANGUAGES, get_catalog


def signals_from_request(request, data):
    """Build device signals from the User-Agent header and client hints."""
    return DeviceSignals(
        user_agent=request.META.get('HTTP_USER_AGENT', '')[:500],
        platform=data.get('platform') or '',
        pixel_ratio=data.get('pixel_ratio'),
        screen_width=data.get('screen_width'),
        screen_height=data.get('screen_height'),
        gpu_renderer=data.get('gpu_renderer') or None,
    )


def build_limiter(request, config):
    """Rate limiter scoped to the requesting client."""
    store = CacheSubmissionStore(
        f"{config.rate_limit_store_key}:{get_client_ip(request, config.trusted_proxy_count)}"
    )
    return RateLimiter(
        store,
        max_submissions=config.rate_limit_max_submissions,
        window_seconds=config.rate_limit_window_seconds,
    )


class ContactFormMetadataView(APIView):
    """
    Labels, messages and limits for rendering the contact form.

    GET /api/contact/form?lang=en
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request):
        config = ContactFormConfig.from_settings()
        catalog = get_catalog()
        language = catalog.resolve(request.query_params.get('lang'))

        data = {
            'language': language,
            'languages': [dict(entry) for entry in LANGUAGES],
            'messages': dict(catalog.messages(language)),
            'phone_country_code': config.phone_country_code,
            'phone_placeholder': PHONE_PLACEHOLDER,
            'name_max_length': config.name_max_length,
            'message_max_length': config.message_max_length,
            'require_consent': config.require_consent,
            'require_contact_method': config.require_contact_method,
            'privacy_policy_url': config.privacy_policy_url,
        }
        return Response(ContactFormMetadataSerializer(data).data)


class ContactFormSubmitView(APIView):
    """
    Public endpoint for contact form submissions.

    POST /api/contact/submit

    No authentication required. Rate limited per client IP. The sanitized
    form is echoed back on failure so the frontend can keep it.
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        """Submit a contact form."""
        serializer = ContactFormSubmitSerializer(data=request.data)

        if not serializer.is_valid():
            return Response(
                {
                    'success': False,
                    'error': 'Validation failed',
                    'fields': serializer.errors
                },
                status=status.HTTP_400_BAD_REQUEST
            )

        data = serializer.validated_data
        config = ContactFormConfig.from_settings()
        messages = get_catalog().messages(data.get('lang'))
        limiter = build_limiter(request, config)

        session = ContactFormSession(
            config,
            client=WebhookSubmitClient.from_config(config),
            limiter=limiter,
            messages=messages,
        )
        for field in FORM_FIELDS:
            session.update_field(field, data.get(field, ''))
        session.set_consent(data.get('consent', False))

        state = session.submit(signals_from_request(request, data))

        if state == SubmissionState.SUCCESS:
            return Response(
                {
                    'success': True,
                    'state': state,
                    'message': messages['success_title'],
                    'detail': messages['success_body'],
                },
                status=status.HTTP_201_CREATED
            )

        body = {
            'success': False,
            'state': session.state,
            'outcome': session.outcome,
            'errors': session.errors,
            'form': dict(session.form.as_dict(), phone_display=session.display_phone),
            'can_submit': session.can_submit,
        }

        if session.outcome == SubmissionState.RATE_LIMITED:
            retry_after = limiter.retry_after()
            return Response(
                dict(body, retry_after=retry_after),
                status=status.HTTP_429_TOO_MANY_REQUESTS,
                headers={'Retry-After': str(retry_after)}
            )

        if session.outcome == SubmissionState.SUBMIT_ERROR:
            return Response(body, status=status.HTTP_502_BAD_GATEWAY)

        return Response(body, status=status.HTTP_400_BAD_REQUEST)
