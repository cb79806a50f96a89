"""
Contact Form App

Handles the marketing site contact form:
- Input sanitization and phone display formatting
- Submit-time validation (contact method and consent rules)
- Sliding-window rate limiting per client
- Best-effort device classification
- Forwarding to the contact webhook
- Translated labels and error messages
"""
