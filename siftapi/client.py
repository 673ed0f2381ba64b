"""
Sift API client.

This module provides the SiftAPI client: it signs every request with the
account's API secret, sends it with requests and returns the parsed JSON
body. One method is exposed per API endpoint.
"""

import json
import logging
import time
from typing import Any, Dict, Iterable, Optional
from urllib.parse import quote

import requests

from .constants import (
    API_VERSION,
    BODY_FORMATS,
    DEFAULT_CONFIG,
    FILTER_RULE_FIELDS,
    RESERVED_PARAMS,
    SIGNATURE_PARAM
)
from .exceptions import (
    ConfigurationError,
    TransportError,
    ValidationError
)
from .signer import Signer
from .utils import build_url, clean_params, merge_params

logger = logging.getLogger(__name__)


class SiftAPI:
    """
    Client for the Sift email-parsing API.

    Credentials are fixed at construction. The only state shared between
    calls is the requests.Session, which is not guaranteed to be
    thread-safe; use one client per thread for concurrent calls.
    """

    def __init__(self, api_key: str, api_secret: str, **config):
        """
        Initialize the client.

        Args:
            api_key: Developer API key
            api_secret: Developer API secret used to sign requests
            **config: Configuration options (base_url, timeout, body_format)
        """
        self._api_key = api_key
        self._api_secret = api_secret

        # Merge default config with user overrides
        self.config = {**DEFAULT_CONFIG, **config}

        self._validate_config()

        self.signer = Signer(api_secret)
        self.api_url = f"{self.config['base_url'].rstrip('/')}/{API_VERSION}"
        self.session = requests.Session()

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def api_secret(self) -> str:
        return self._api_secret

    def _validate_config(self):
        """Validate credentials and configuration."""
        if not self._api_key:
            raise ConfigurationError("api_key cannot be empty")

        if not self._api_secret:
            raise ConfigurationError("api_secret cannot be empty")

        if not self.config['base_url']:
            raise ConfigurationError("base_url cannot be empty")

        if self.config['timeout'] is not None and self.config['timeout'] <= 0:
            raise ConfigurationError("timeout must be positive")

        if self.config['body_format'] not in BODY_FORMATS:
            raise ConfigurationError(
                f"body_format must be one of {', '.join(BODY_FORMATS)}"
            )

    def _generate_params(self, timestamp: Optional[int] = None) -> Dict[str, Any]:
        """
        Generate the common parameters sent with every call.

        Args:
            timestamp: Unix time in seconds, defaults to now
        """
        if timestamp is None:
            timestamp = int(time.time())
        return {
            'api_key': self._api_key,
            'timestamp': timestamp,
        }

    def _generate_signature(self, method: str, path: str, params=None, data=None) -> str:
        """
        Generate the signature for a request.

        Args:
            method: GET/POST/PUT/DELETE
            path: Endpoint path without the version, e.g. `/users/<username>/sifts`
            params: Query parameters, including api_key and timestamp
            data: Body parameters
        """
        return self.signer.signature(method, path, params, data)

    def _request(self, method: str, path: str, params=None, data=None,
                 timestamp: Optional[int] = None) -> Dict[str, Any]:
        """
        Sign and send a request, returning the parsed JSON body.

        The body is returned whatever its `code` is; use
        siftapi.raise_for_code() to turn API failures into exceptions.

        Args:
            method: GET/POST/PUT/DELETE
            path: Endpoint path without the version
            params: Query parameters
            data: Body parameters (not allowed for GET)
            timestamp: Override for the generated timestamp

        Returns:
            Parsed JSON response

        Raises:
            ValidationError: If the request cannot be signed as given
            TransportError: If the request fails or the body is not JSON
        """
        method = method.upper()
        data = clean_params(data)
        if method == 'GET' and data:
            raise ValidationError("GET requests cannot carry body parameters")

        reserved = sorted(set(data) & set(RESERVED_PARAMS))
        if reserved:
            raise ValidationError(f"body cannot set reserved parameters: {', '.join(reserved)}")

        params = merge_params(clean_params(params), self._generate_params(timestamp))
        signature = self._generate_signature(method, path, params, data)
        params[SIGNATURE_PARAM] = signature

        url = build_url(self.api_url, path)
        kwargs = {
            'params': params,
            'timeout': self.config['timeout'],
        }
        if method != 'GET' and data:
            if self.config['body_format'] == 'json':
                kwargs['json'] = data
            else:
                kwargs['data'] = data

        logger.debug("Sending %s %s", method, path)
        try:
            response = self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            raise TransportError(f"HTTP request failed: {e}") from e

        logger.debug("%s %s returned HTTP %s", method, path, response.status_code)
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                f"Response is not valid JSON (HTTP {response.status_code})",
                response
            ) from e

    @staticmethod
    def _segment(name: str, value) -> str:
        """Validate a required path argument and quote it."""
        if value is None or str(value) == '':
            raise ValidationError(f"{name} cannot be empty")
        return quote(str(value), safe='')

    @staticmethod
    def _require(**fields):
        for name, value in fields.items():
            if value is None or value == '':
                raise ValidationError(f"{name} cannot be empty")

    def _filter_data(self, description: Optional[str], rules: Dict[str, Any]) -> Dict[str, Any]:
        """Build the body of an email filter call from its rules."""
        data = {}
        if description is not None:
            data['description'] = description

        for name, value in rules.items():
            if name not in FILTER_RULE_FIELDS:
                logger.warning("Ignoring unknown email filter field %r", name)
                continue
            if not isinstance(value, (list, tuple)):
                logger.warning(
                    "Ignoring email filter field %r: expected a list, got %s",
                    name, type(value).__name__
                )
                continue
            data[name] = json.dumps(list(value))
        return data

    # Users

    def add_user(self, username: str, locale: str) -> Dict[str, Any]:
        """Create a user."""
        self._require(username=username, locale=locale)
        return self._request('POST', '/users', data={
            'username': username,
            'locale': locale,
        })

    def delete_user(self, username: str) -> Dict[str, Any]:
        """Delete a user and all of their data."""
        return self._request('DELETE', f"/users/{self._segment('username', username)}")

    def get_connect_token(self, username: str) -> Dict[str, Any]:
        """Request a token that lets the user connect a mailbox."""
        self._require(username=username)
        return self._request('POST', '/connect_token', data={'username': username})

    # Email connections

    def get_email_connections(self, username: str, limit: Optional[int] = None,
                              offset: Optional[int] = None) -> Dict[str, Any]:
        """List the mailboxes connected for a user."""
        path = f"/users/{self._segment('username', username)}/email_connections"
        return self._request('GET', path, params={'limit': limit, 'offset': offset})

    def add_email_connection(self, username: str, account_type: str, account: str,
                             **credentials) -> Dict[str, Any]:
        """
        Connect a mailbox for a user.

        Args:
            username: User to connect the mailbox for
            account_type: Provider, e.g. `google`, `imap`, `exchange`
            account: Mailbox address
            **credentials: Provider specific fields such as refresh_token,
                password or host
        """
        self._require(account_type=account_type, account=account)
        path = f"/users/{self._segment('username', username)}/email_connections"
        data = {**credentials, 'account_type': account_type, 'account': account}
        return self._request('POST', path, data=data)

    def delete_email_connection(self, username: str, connection_id) -> Dict[str, Any]:
        """Disconnect a mailbox."""
        path = "/users/{}/email_connections/{}".format(
            self._segment('username', username),
            self._segment('connection_id', connection_id)
        )
        return self._request('DELETE', path)

    # Sifts

    def get_sifts(self, username: str, limit: Optional[int] = None,
                  offset: Optional[int] = None, last_update_time: Optional[int] = None,
                  domains: Optional[Iterable[str]] = None) -> Dict[str, Any]:
        """
        List the sifts extracted for a user.

        Args:
            username: Owner of the sifts
            limit: Maximum number of sifts to return
            offset: Index of the first sift to return
            last_update_time: Only return sifts updated after this Unix time
            domains: Only return sifts of these domains, e.g. ['flight']
        """
        if domains is not None and not isinstance(domains, str):
            domains = ','.join(domains)
        path = f"/users/{self._segment('username', username)}/sifts"
        return self._request('GET', path, params={
            'limit': limit,
            'offset': offset,
            'last_update_time': last_update_time,
            'domains': domains,
        })

    def get_sift(self, username: str, sift_id, include_eml: Optional[bool] = None) -> Dict[str, Any]:
        """Get a single sift."""
        path = "/users/{}/sifts/{}".format(
            self._segment('username', username),
            self._segment('sift_id', sift_id)
        )
        return self._request('GET', path, params={'include_eml': include_eml})

    def discovery(self, email: str) -> Dict[str, Any]:
        """Extract structured data from a raw email message."""
        self._require(email=email)
        return self._request('POST', '/discovery', data={'email': email})

    def post_feedback(self, email: str, locale: str, timezone: str) -> Dict[str, Any]:
        """Report an email that was parsed incorrectly or not at all."""
        self._require(email=email, locale=locale, timezone=timezone)
        return self._request('POST', '/feedback', data={
            'email': email,
            'locale': locale,
            'timezone': timezone,
        })

    # Email filters

    def get_email_filters(self, limit: Optional[int] = None,
                          offset: Optional[int] = None) -> Dict[str, Any]:
        """List the developer's email filters."""
        return self._request('GET', '/emails/filters', params={'limit': limit, 'offset': offset})

    def get_email_filter(self, filter_id) -> Dict[str, Any]:
        """Get a single email filter."""
        return self._request('GET', f"/emails/filters/{self._segment('filter_id', filter_id)}")

    def add_email_filter(self, description: Optional[str] = None, **rules) -> Dict[str, Any]:
        """
        Create an email filter.

        Rule values must be lists; they are sent JSON-encoded. Rules with
        unknown names or non-list values are dropped with a warning.

        Raises:
            ValidationError: If no valid rule remains
        """
        data = self._filter_data(description, rules)
        if not any(name in data for name in FILTER_RULE_FIELDS):
            raise ValidationError(
                f"email filter needs at least one of: {', '.join(FILTER_RULE_FIELDS)}"
            )
        return self._request('POST', '/emails/filters', data=data)

    def update_email_filter(self, filter_id, description: Optional[str] = None,
                            **rules) -> Dict[str, Any]:
        """Update an email filter; only the given fields change."""
        path = f"/emails/filters/{self._segment('filter_id', filter_id)}"
        data = self._filter_data(description, rules)
        if not data:
            raise ValidationError("nothing to update")
        return self._request('PUT', path, data=data)

    def delete_email_filter(self, filter_id) -> Dict[str, Any]:
        """Delete an email filter."""
        return self._request('DELETE', f"/emails/filters/{self._segment('filter_id', filter_id)}")

    def close(self):
        """Close HTTP session."""
        if self.session:
            self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
