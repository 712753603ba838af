"""Tests for tw_candidate.core.cache — memoization of parse results."""

import pytest
from tw_candidate.core.cache import MISSING, CandidateCache
from tw_candidate.core.types import UtilityCandidate


class TestCandidateCache:
    def test_store_and_get(self):
        cache = CandidateCache()
        c = UtilityCandidate(raw='flex', name='flex')
        cache.store('flex', c)
        assert cache.get('flex') is c

    def test_get_missing_raises(self):
        with pytest.raises(KeyError):
            CandidateCache().get('flex')

    def test_none_is_a_cached_value(self):
        cache = CandidateCache()
        cache.store('bg-[]', None)
        assert 'bg-[]' in cache
        assert cache.get('bg-[]') is None
        assert cache.lookup('bg-[]') is None

    def test_lookup_missing_returns_sentinel(self):
        assert CandidateCache().lookup('flex') is MISSING

    def test_lookup_custom_default(self):
        assert CandidateCache().lookup('flex', 'nope') == 'nope'

    def test_len_and_iter(self):
        cache = CandidateCache()
        cache.store('a', None)
        cache.store('b', None)
        assert len(cache) == 2
        assert list(cache) == ['a', 'b']

    def test_clear(self):
        cache = CandidateCache()
        cache.store('a', None)
        cache.clear()
        assert len(cache) == 0
        assert 'a' not in cache

    def test_no_eviction(self):
        cache = CandidateCache()
        for i in range(5000):
            cache.store(f'w-{i}', None)
        assert len(cache) == 5000
