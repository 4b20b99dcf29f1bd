MISSING_API_KEY_MESSAGE = (
    "API key is required. Please enter your Gemini API key in the sidebar to use this feature."
)


class CredentialRequiredError(ValueError):
    """Raised before any network call when no model credential was supplied."""

    def __init__(self, message: str = MISSING_API_KEY_MESSAGE):
        super().__init__(message)


class FlowOutputError(ValueError):
    """The model answered, but not with JSON matching the declared schema."""


class MediaMissingError(RuntimeError):
    """A media generation call (speech, image) returned no media."""


class InvalidDataUriError(ValueError):
    pass


class SignatureMismatchError(ValueError):
    pass


class PaymentNotCapturedError(ValueError):
    def __init__(self, payment_id: str, status: str | None):
        self.payment_id = payment_id
        self.status = status
        super().__init__(f"Payment {payment_id} not successful (status={status!r})")


class NotFoundError(LookupError):
    pass


class InvalidWebhookPayloadError(ValueError):
    """A correctly signed webhook body that is not a JSON object."""
