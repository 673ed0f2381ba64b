"""
Helpers shared by the signer and the request dispatcher.
"""

from typing import Any, Dict, Mapping, Optional

from .constants import RESERVED_PARAMS, SUCCESS_CODE, SUCCESS_MESSAGE
from .exceptions import APIError


def sort_dict(mapping: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a new dict with the keys of `mapping` in ascending order."""
    return {key: mapping[key] for key in sorted(mapping)}


def build_url(url: str, path: str) -> str:
    """Join a versioned base URL and an endpoint path."""
    return f"{url}{path}"


def merge_params(params: Optional[Mapping[str, Any]],
                 generated: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Merge generated common parameters into caller-supplied parameters.

    Caller values are kept, except for the reserved keys (api_key,
    timestamp), where the generated value always wins.

    Args:
        params: Caller-supplied query parameters (may be None)
        generated: Parameters generated for this call

    Returns:
        New dict; neither input is modified
    """
    merged = dict(params or {})
    for key, value in generated.items():
        if key in RESERVED_PARAMS or key not in merged:
            merged[key] = value
    return merged


def stringify(value: Any) -> str:
    """Render a parameter value the way it is signed and sent."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


def clean_params(mapping: Optional[Mapping[str, Any]]) -> Dict[str, str]:
    """Drop unset (None) values and stringify the rest."""
    if not mapping:
        return {}
    return {key: stringify(value) for key, value in mapping.items() if value is not None}


def raise_for_code(body: Mapping[str, Any]) -> Mapping[str, Any]:
    """
    Raise APIError if a parsed response reports a failure.

    The client returns application errors as ordinary responses; callers
    that prefer exceptions can pass the body through this function.
    """
    code = body.get('code')
    message = body.get('message', '')
    if code != SUCCESS_CODE or message != SUCCESS_MESSAGE:
        raise APIError(code, message, body)
    return body
