"""
Unit tests for helper functions.
"""

import pytest

from siftapi import APIError, build_url, raise_for_code, sort_dict
from siftapi.utils import clean_params, merge_params, stringify


class TestSortDict:
    """Test key sorting."""

    def test_sorts_by_key(self):
        """Test a dict is sorted by its keys."""
        result = sort_dict({'b': 2, 'a': 1, 'c': 3})

        assert list(result) == ['a', 'b', 'c']
        assert result == {'a': 1, 'b': 2, 'c': 3}

    def test_idempotent(self):
        """Test sorting a sorted dict changes nothing."""
        once = sort_dict({'b': 2, 'a': 1, 'c': 3})
        twice = sort_dict(once)

        assert list(twice) == list(once)
        assert twice == once

    def test_input_untouched(self):
        """Test the input keeps its order."""
        original = {'b': 2, 'a': 1}
        sort_dict(original)

        assert list(original) == ['b', 'a']


def test_build_url():
    """Test URL building is plain concatenation."""
    url = 'http://api.easilydo.com/v1'
    path = '/users/test/sifts'

    assert build_url(url, path) == 'http://api.easilydo.com/v1/users/test/sifts'


class TestMergeParams:
    """Test merging generated params into caller params."""

    def test_reserved_keys_overridden(self):
        """Test generated api_key and timestamp win."""
        merged = merge_params(
            {'api_key': 'spoofed', 'timestamp': 1, 'limit': 10},
            {'api_key': 'abc', 'timestamp': 1459546790}
        )
        assert merged == {'api_key': 'abc', 'timestamp': 1459546790, 'limit': 10}

    def test_caller_keys_kept(self):
        """Test non-reserved caller keys survive a collision."""
        merged = merge_params({'offset': 5}, {'offset': 0, 'api_key': 'abc'})

        assert merged == {'offset': 5, 'api_key': 'abc'}

    def test_none_params(self):
        """Test missing caller params."""
        assert merge_params(None, {'api_key': 'abc'}) == {'api_key': 'abc'}

    def test_inputs_not_modified(self):
        """Test neither input is mutated."""
        params = {'limit': 10}
        generated = {'api_key': 'abc'}
        merge_params(params, generated)

        assert params == {'limit': 10}
        assert generated == {'api_key': 'abc'}


class TestCleanParams:
    """Test value normalization."""

    def test_drops_none(self):
        """Test unset optional values are dropped."""
        assert clean_params({'limit': None, 'offset': 0}) == {'offset': '0'}

    def test_empty(self):
        """Test empty and missing mappings."""
        assert clean_params(None) == {}
        assert clean_params({}) == {}

    def test_stringify(self):
        """Test values are stringified the way they are signed."""
        assert stringify(True) == 'true'
        assert stringify(False) == 'false'
        assert stringify(42) == '42'
        assert stringify('en_US') == 'en_US'


class TestRaiseForCode:
    """Test application error helper."""

    def test_success(self):
        """Test a success body is returned."""
        body = {'code': 200, 'message': 'success', 'result': []}

        assert raise_for_code(body) is body

    def test_failure(self):
        """Test a failure body raises APIError."""
        body = {'code': 400, 'message': 'Invalid username', 'result': None}

        with pytest.raises(APIError) as exc_info:
            raise_for_code(body)

        assert exc_info.value.code == 400
        assert exc_info.value.message == 'Invalid username'
        assert exc_info.value.body is body

    def test_failure_message_with_success_code(self):
        """Test a 200 code without the success message still raises."""
        body = {'code': 200, 'message': 'Invalid signature', 'result': None}

        with pytest.raises(APIError) as exc_info:
            raise_for_code(body)

        assert exc_info.value.message == 'Invalid signature'
