"""
MDP SDK custom exception hierarchy
"""

from typing import Any


class MDPError(Exception):
    """MDP SDK base exception"""

    pass


# ---------------------------------------------------------------------------
# API errors
# ---------------------------------------------------------------------------


class APIError(MDPError):
    """Marketplace API returned a non-success response"""

    def __init__(self, message: str, status_code: int | None, response: Any = None):
        self.status_code = status_code
        self.response = response
        super().__init__(message)


class ValidationError(APIError):
    """Request rejected as invalid (400)"""

    def __init__(self, message: str = "Validation failed", response: Any = None):
        super().__init__(message, 400, response)


class AuthenticationError(APIError):
    """Authentication required (401)"""

    def __init__(self, message: str = "Authentication required", response: Any = None):
        super().__init__(message, 401, response)


class AuthorizationError(APIError):
    """Not allowed to access the resource (403)"""

    def __init__(self, message: str = "Not authorized", response: Any = None):
        super().__init__(message, 403, response)


class NotFoundError(APIError):
    """Resource not found (404)"""

    def __init__(self, message: str = "Resource not found", response: Any = None):
        super().__init__(message, 404, response)


class RequestTimeoutError(APIError):
    """Request aborted by the transport timeout"""

    def __init__(self, message: str = "Request timeout"):
        super().__init__(message, 408)


class NetworkError(APIError):
    """Request failed before a response was received (no status code)"""

    def __init__(self, message: str = "Network error"):
        super().__init__(message, None)


# ---------------------------------------------------------------------------
# Payment errors
# ---------------------------------------------------------------------------


class PaymentError(MDPError):
    """Payment-related error"""

    pass


class InvalidRequirementError(PaymentError):
    """Payment requirement is missing fields or malformed"""

    pass


class UnsupportedSignerError(PaymentError):
    """Signer lacks a capability the payment flow needs"""

    pass


class MissingWalletMetadataError(PaymentError):
    """Contract mode requirement does not name the agent wallets"""

    pass


class SettlementFailedError(PaymentError):
    """A settlement call was rejected"""

    def __init__(self, payment_id: str, index: int, reason: str):
        self.payment_id = payment_id
        self.index = index
        self.reason = reason
        super().__init__(f"Settlement failed for payment {payment_id} (requirement {index}): {reason}")


class ConfirmationError(PaymentError):
    """Confirmation check failed after the transaction was submitted"""

    def __init__(self, payment_id: str, tx_hash: str, reason: str):
        self.payment_id = payment_id
        self.tx_hash = tx_hash
        self.reason = reason
        super().__init__(
            f"Confirmation failed for payment {payment_id} (tx {tx_hash}): {reason}. "
            "The transaction was submitted and may still settle."
        )


# ---------------------------------------------------------------------------
# Signing and chain errors
# ---------------------------------------------------------------------------


class SignatureError(MDPError):
    """Signature-related error"""

    pass


class SignatureCreationError(SignatureError):
    """Signature creation failed"""

    pass


class TransactionError(MDPError):
    """Transaction-related error"""

    def __init__(self, message: str, payment_id: str | None = None):
        self.payment_id = payment_id
        super().__init__(message)


class ConfigurationError(MDPError):
    """Configuration-related error"""

    pass
