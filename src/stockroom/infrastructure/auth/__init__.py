"""Authentication infrastructure components.

Only shared-secret API keys are supported; issuing keys is out of scope.
"""

from stockroom.infrastructure.auth.api_key_authenticator import (
    API_KEY_REQUIRED_MESSAGE,
    INVALID_API_KEY_MESSAGE,
    authenticate_api_key,
)

__all__ = [
    "API_KEY_REQUIRED_MESSAGE",
    "INVALID_API_KEY_MESSAGE",
    "authenticate_api_key",
]
