"""
Request signing for the Sift API.

Every call is signed with HMAC-SHA1 over a canonical string built from the
HTTP method, the versioned path and all query and body parameters sorted by
key:

    GET&/v1/users/test/sifts&api_key=abc&timestamp=1459546790

The signature itself is sent as the `signature` query parameter and is never
part of the string it signs.
"""

import hashlib
import hmac
from typing import Any, Mapping, Optional

from .constants import API_VERSION, SIGNATURE_PARAM
from .exceptions import ConfigurationError, ValidationError
from .utils import sort_dict


def canonicalize(method: str, path: str,
                 params: Optional[Mapping[str, Any]] = None,
                 data: Optional[Mapping[str, Any]] = None) -> str:
    """
    Build the base string for a request.

    Args:
        method: GET/POST/PUT/DELETE (any case)
        path: Endpoint path without the version, e.g. `/users/test/sifts`
        params: Query parameters, including api_key and timestamp
        data: Body parameters

    Returns:
        Base string; values are concatenated raw, without URL-encoding

    Raises:
        ValidationError: If a signature field is among the parameters
    """
    fields = {**(params or {}), **(data or {})}
    if SIGNATURE_PARAM in fields:
        raise ValidationError(f"'{SIGNATURE_PARAM}' cannot be signed")

    base_string = f"{method.upper()}&/{API_VERSION}{path}"
    for key, value in sort_dict(fields).items():
        base_string += f"&{key}={value}"
    return base_string


def sign(base_string: str, secret: str) -> str:
    """
    Compute the lowercase hex HMAC-SHA1 of a base string.

    Raises:
        ConfigurationError: If the secret is empty
    """
    if not secret:
        raise ConfigurationError("api_secret cannot be empty")

    mac = hmac.new(
        secret.encode('utf-8'),
        base_string.encode('utf-8'),
        hashlib.sha1
    )
    return mac.hexdigest()


class Signer:
    """Signs and verifies requests with a fixed API secret."""

    def __init__(self, secret: str):
        if not secret:
            raise ConfigurationError("api_secret cannot be empty")
        self._secret = secret

    def signature(self, method: str, path: str, params=None, data=None) -> str:
        """Return the signature for a request."""
        return sign(canonicalize(method, path, params, data), self._secret)

    def verify(self, method: str, path: str, params, data, signature: str) -> bool:
        """Check a signature captured from a request in constant time."""
        params = {k: v for k, v in (params or {}).items() if k != SIGNATURE_PARAM}
        expected = self.signature(method, path, params, data)
        return hmac.compare_digest(expected, signature)
