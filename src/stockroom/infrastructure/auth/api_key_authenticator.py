"""API key authentication for mutating routes.

Compares the key presented by the client against the configured secret.
Keys are compared with ``hmac.compare_digest`` so timing does not leak
how much of a guessed key matched.
"""

import hmac

from stockroom.core.errors import Failure

API_KEY_REQUIRED_MESSAGE = "API key is required"
INVALID_API_KEY_MESSAGE = "Invalid API key"


def authenticate_api_key(presented: str | None, expected: str | None) -> Failure | None:
    """Check a presented API key.

    Args:
        presented: Value of the API key header, None if the header is absent.
        expected: Configured secret. When unset, no key is accepted.

    Returns:
        None if the key is allowed, otherwise an ``Unauthenticated`` failure.
    """
    if not presented:
        return Failure.unauthenticated(API_KEY_REQUIRED_MESSAGE)

    if not expected or not hmac.compare_digest(
        presented.encode("utf-8"), expected.encode("utf-8")
    ):
        return Failure.unauthenticated(INVALID_API_KEY_MESSAGE)

    return None
