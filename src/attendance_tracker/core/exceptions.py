class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidTimeFormatError(ValidationError):
    """Raised when a clock-time string is not a valid HH:mm[:ss] value."""


class NotFoundError(DomainError):
    """Raised when a referenced user, device or shift does not exist."""


class UserNotFoundError(NotFoundError):
    pass


class DeviceNotFoundError(NotFoundError):
    pass


class FingerprintNotRegisteredError(NotFoundError):
    """No user is enrolled under this fingerprint slot on the device."""


class CardNotRegisteredError(NotFoundError):
    """No user owns this card number."""


class AuthorizationError(DomainError):
    """Raised when a user is not allowed to authenticate on a device."""


class VerificationTimeoutError(DomainError):
    """Raised when a device did not answer the enrolment handshake in time."""
