"""
Sift API Client Library

A Python client for the EasilyDo Sift email-parsing API. Every request is
signed with HMAC-SHA1 using the developer's API secret.

Example usage:
    from siftapi import SiftAPI

    sift = SiftAPI("your-api-key", "your-api-secret")
    sift.add_user("test", "en_US")
    response = sift.get_sifts("test")
"""

from .client import SiftAPI
from .exceptions import (
    SiftAPIError,
    ConfigurationError,
    ValidationError,
    TransportError,
    APIError
)
from .constants import (
    API_VERSION,
    API_URL,
    DEFAULT_CONFIG,
    FILTER_RULE_FIELDS
)
from .signer import Signer, canonicalize, sign
from .utils import build_url, raise_for_code, sort_dict

__version__ = "1.0.0"
__all__ = [
    "SiftAPI",
    "SiftAPIError",
    "ConfigurationError",
    "ValidationError",
    "TransportError",
    "APIError",
    "API_VERSION",
    "API_URL",
    "DEFAULT_CONFIG",
    "FILTER_RULE_FIELDS",
    "Signer",
    "canonicalize",
    "sign",
    "build_url",
    "raise_for_code",
    "sort_dict"
]
