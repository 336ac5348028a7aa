from collections import Counter
from typing import Iterable, List, Tuple


class CountMap(Counter):
    """
    multiset of group names, counting the members seen in each group

    Example:
        >>> counts = CountMap()
        >>> counts.count('op1')
        1
        >>> counts.count('op1')
        2
        >>> counts.sorted_counts()
        [('op1', 2)]
    """

    def count(self, key: str) -> int:
        """
        add one to the count for a key and return the new count
        """
        self[key] += 1
        return self[key]

    def count_all(self, keys: Iterable[str]):
        for key in keys:
            self.count(key)

    def accumulate(self, other: 'CountMap'):
        """
        merge the counts from another map into this one
        """
        self.update(other)

    def sum(self) -> int:
        return sum(self.values())

    def sorted_counts(self) -> List[Tuple[str, int]]:
        """
        Returns:
            the (key, count) pairs, largest count first. Keys with equal counts are kept in the
            order they were first counted
        """
        return self.most_common()

    def best(self) -> Tuple[str, int]:
        """
        Returns:
            the key with the largest count and its count

        Raises:
            IndexError: the map is empty
        """
        return self.sorted_counts()[0]
