"""
Tests for request parsing helpers and error envelopes.
"""

import pytest

from app.utils import blank_to_none, parse_amount, safe_float


class TestParseAmount:
    @pytest.mark.parametrize('value, expected', [
        ('1500', 1500.0), (0, 0.0), (2.5, 2.5),
    ])
    def test_valid(self, value, expected):
        assert parse_amount(value, 'Price') == (expected, None)

    def test_negative(self):
        assert parse_amount(-1, 'Price') == (None, 'Price must be non-negative')

    @pytest.mark.parametrize('value', ['nan', 'inf', '-Infinity', float('nan')])
    def test_not_finite(self, value):
        assert parse_amount(value, 'Increment', allow_zero=False) == (
            None, 'Increment must be a finite number'
        )

    def test_zero_not_allowed(self):
        assert parse_amount(0, 'Increment', allow_zero=False) == (
            None, 'Increment must be positive'
        )

    @pytest.mark.parametrize('value', ['lots', None, True, [1]])
    def test_not_a_number(self, value):
        assert parse_amount(value, 'Budget') == (None, 'Budget must be a valid number')

    def test_integer(self):
        assert parse_amount('4', 'Count', integer=True) == (4, None)
        assert parse_amount('4.5', 'Count', integer=True) == (
            None, 'Count must be a valid integer'
        )


def test_safe_float():
    assert safe_float('12.5') == 12.5
    assert safe_float('-', default=3) == 3
    assert safe_float('abc', default=7) == 7


def test_blank_to_none():
    assert blank_to_none('  Batter ') == 'Batter'
    assert blank_to_none('   ') is None
    assert blank_to_none(None) is None


class TestErrorEnvelope:
    def test_unknown_route(self, client):
        response = client.get('/api/nowhere')
        assert response.status_code == 404
        assert response.get_json() == {'success': False, 'error': 'Resource not found'}

    def test_wrong_method(self, client):
        response = client.get('/api/auction/sell')
        assert response.status_code == 405
        assert response.get_json()['error'] == 'Method not allowed'
