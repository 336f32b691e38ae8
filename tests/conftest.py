"""
Shared fixtures for the test suite.
"""

from unittest import mock

import pytest


@pytest.fixture
def make_connection():
    """Factory for a mock connection answering known queries.

    ``responses`` maps SQL text to the rows it returns; any other query
    raises LookupError. ``buffered`` adds the buffering attribute.
    """
    def factory(responses, buffered=None):
        attributes = ['query', 'quote']
        if buffered is not None:
            attributes.append('buffered')
        conn = mock.MagicMock(spec=attributes)

        def query(sql):
            if sql not in responses:
                raise LookupError(f"Unknown query: {sql}")
            return iter(responses[sql])

        conn.query.side_effect = query
        conn.quote.side_effect = lambda value: f'"{value}"'
        if buffered is not None:
            conn.buffered = buffered
        return conn

    return factory
