"""
Contact Form URL Configuration
"""
from django.urls import path
from .views import ContactFormMetadataView, ContactFormSubmitView

app_name = 'contact'

# Public URLs (no auth required)
urlpatterns = [
    path('form', ContactFormMetadataView.as_view(), name='form'),
    path('submit', ContactFormSubmitView.as_view(), name='submit'),
]
