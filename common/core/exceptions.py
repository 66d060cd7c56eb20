class AppException(Exception):
    """Base application exception."""

    pass


class ValidationError(AppException):
    """Validation error exception."""

    pass


class WebhookSignatureError(AppException):
    """Webhook signature missing or not matching the configured secret."""

    pass
