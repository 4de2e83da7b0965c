"""Exceptions raised by the forwarder core and mapped to HTTP at the boundary."""

from typing import Any, Dict, Optional

from .models import DeliveryOutcome


class ForwarderError(Exception):
    """Base exception for all forwarder errors."""

    status_code = 500

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        self.message = message
        self.details = details
        super().__init__(message)

    def to_response(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


# ----- Validation Errors -----


class ValidationError(ForwarderError):
    """Inbound payload rejected."""

    status_code = 400


class MalformedPayloadError(ValidationError):
    """Body is not a JSON object."""

    def __init__(self, message: str = "Invalid JSON payload", details: Optional[str] = None) -> None:
        super().__init__(message, details)


class MissingFieldError(ValidationError):
    """A required field is absent."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"{field.capitalize()} field is required")


# ----- Delivery Errors -----


class DeliveryError(ForwarderError):
    """Delivery to the downstream sink failed."""

    @property
    def outcome(self) -> DeliveryOutcome:
        return DeliveryOutcome.failed(self.details or self.message)


class SinkUnavailableError(DeliveryError):
    """No delivery channel configured for this request context."""

    status_code = 503

    def __init__(self) -> None:
        super().__init__("Message handler not available")


class SendFailedError(DeliveryError):
    """The sink reported an error."""

    status_code = 500

    def __init__(self, reason: str, message: str = "Failed to forward message") -> None:
        self.reason = reason
        super().__init__(message, details=reason)


class InternalError(ForwarderError):
    """Unanticipated failure; never exposes internals."""

    status_code = 500

    def __init__(self) -> None:
        super().__init__(
            "Internal server error occurred while processing webhook",
            details="Plugin encountered an unexpected error",
        )
