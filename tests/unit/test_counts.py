import pytest
from clusterreport.counts import CountMap


class TestCountMap:
    def test_count_returns_new_count(self):
        counts = CountMap()
        assert counts.count('a') == 1
        assert counts.count('a') == 2
        assert counts['a'] == 2

    def test_missing_key_is_zero(self):
        assert CountMap()['missing'] == 0

    def test_count_all(self):
        counts = CountMap()
        counts.count_all(['a', 'b', 'a'])
        assert counts == {'a': 2, 'b': 1}

    def test_sum(self):
        counts = CountMap()
        counts.count_all(['a', 'b', 'a', 'c'])
        assert counts.sum() == 4

    def test_accumulate(self):
        total = CountMap()
        first = CountMap()
        first.count_all(['a', 'b'])
        second = CountMap()
        second.count_all(['b', 'c', 'c'])
        total.accumulate(first)
        total.accumulate(second)
        assert total == {'a': 1, 'b': 2, 'c': 2}
        assert first == {'a': 1, 'b': 1}

    def test_sorted_counts_largest_first(self):
        counts = CountMap()
        counts.count_all(['a', 'b', 'b', 'c', 'c', 'c'])
        assert counts.sorted_counts() == [('c', 3), ('b', 2), ('a', 1)]

    def test_ties_keep_insertion_order(self):
        counts = CountMap()
        counts.count_all(['x', 'y', 'z', 'y', 'x'])
        assert counts.sorted_counts() == [('x', 2), ('y', 2), ('z', 1)]
        assert counts.best() == ('x', 2)

    def test_best_empty_error(self):
        with pytest.raises(IndexError):
            CountMap().best()
