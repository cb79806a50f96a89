from django.apps import AppConfig


class ContactConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'contact'
    verbose_name = 'Contact Form'

    def ready(self):
        """Register system checks when app is ready."""
        import contact.checks  # noqa
