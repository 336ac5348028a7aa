"""
Computes the evidence that the members of a cluster belong together. For each kind of grouping
(operons, subsystems, projects, ...) the evidence is the number of member pairs that share a group
"""
from typing import Optional, Tuple

from ..counts import CountMap


def possible_pairs(size: int) -> int:
    """
    Returns:
        the number of distinct pairs in a cluster of the given size

    Example:
        >>> possible_pairs(3)
        3
    """
    return size * (size - 1) // 2


def count_pairs(counts: CountMap) -> Tuple[int, int]:
    """
    Returns:
        the number of member pairs sharing a group and the number of groups with more than one member
    """
    pair_count = 0
    group_count = 0
    for _, n in counts.sorted_counts():
        if n > 1:
            group_count += 1
            pair_count += possible_pairs(n)
    return pair_count, group_count


def describe_evidence(dimension: str, plural: str, counts: CountMap) -> Optional[str]:
    """
    Args:
        dimension: name of the kind of grouping
        plural: plural form of the name
        counts: number of cluster members in each group

    Returns:
        a sentence describing the pairs found in groups of this kind, or None if there are none

    Example:
        >>> describe_evidence('operon', 'operons', CountMap({'op1': 2, 'op2': 1}))
        'One pair in operon op1.'
    """
    if not counts:
        return None
    pair_count, group_count = count_pairs(counts)
    best, best_count = counts.best()
    if pair_count == 1:
        return f'One pair in {dimension} {best}.'
    elif pair_count > 1:
        return (
            f'{pair_count} pairs found in {group_count} {plural}. '
            f'Largest {dimension} is {best} with {best_count} members.'
        )
    return None
