"""
Constants for the Sift API client library.
"""

# Endpoint (the API version is also part of every signed base string)
API_VERSION = "v1"
BASE_URL = "https://api.easilydo.com"
API_URL = f"{BASE_URL}/{API_VERSION}"

# Default configuration values
DEFAULT_CONFIG = {
    'base_url': BASE_URL,
    'timeout': 30,          # HTTP timeout in seconds
    'body_format': 'form',  # 'form' or 'json'
}

BODY_FORMATS = ('form', 'json')

# Generated on every call; override caller-supplied values of the same name
RESERVED_PARAMS = ('api_key', 'timestamp')
SIGNATURE_PARAM = 'signature'

# Array-valued rule fields accepted by the email filter endpoints
FILTER_RULE_FIELDS = (
    'sift_types',
    'domains',
    'from_emails',
    'from_domains',
    'subjects',
)

# Response envelope
SUCCESS_CODE = 200
SUCCESS_MESSAGE = 'success'
