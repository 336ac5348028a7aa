"""
holds the cluster objects produced by the upstream clustering step and the reader for the cluster files
"""
from dataclasses import dataclass, field
from typing import Iterator, List, Tuple, Union

import pandas as pd

from .util import logger, split_list

CLUSTER_COLUMNS = ['id', 'height', 'score', 'members']


@dataclass(frozen=True)
class Cluster:
    """
    a group of related identifiers

    Attributes:
        id: the identifier assigned by the clustering algorithm
        height: height of the cluster in the clustering tree
        score: similarity score of the cluster
        members: the member identifiers, in clustering order
    """

    id: str
    height: Union[int, float]
    score: float
    members: Tuple[str, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.members)

    @property
    def size(self) -> int:
        return len(self.members)

    def is_trivial(self) -> bool:
        return len(self.members) <= 1


class ClusterGroup:
    """
    The full set of clusters from one clustering run
    """

    def __init__(self, clusters: List[Cluster]):
        self.clusters = list(clusters)
        seen = dict()
        for cluster in self.clusters:
            for member in cluster.members:
                seen.setdefault(member, None)
        self.data_points: List[str] = list(seen)

    def __iter__(self) -> Iterator[Cluster]:
        return iter(self.clusters)

    def __len__(self) -> int:
        return len(self.clusters)


def _cast_height(value):
    height = float(value)
    return int(height) if height.is_integer() else height


def read_clusters(*filepaths: str) -> ClusterGroup:
    """
    reads a set of clusters from tab-delimited files. The header should contain the following columns

    - id: the cluster identifier
    - height: height of the cluster
    - score: score of the cluster
    - members: comma-delimited list of the member identifiers

    For example:

    .. code-block:: text

        id      height  score   members
        1       2       0.95    fig|83333.1.peg.4,fig|83333.1.peg.5,fig|83333.1.peg.6

    Returns:
        the clusters in input order
    """
    clusters = []
    for filepath in filepaths:
        logger.info(f'loading: {filepath}')
        df = pd.read_csv(filepath, sep='\t', dtype=str, keep_default_na=False)
        for col in CLUSTER_COLUMNS:
            if col not in df:
                raise KeyError(f'missing required column ({col})', filepath)
        for row in df.to_dict('records'):
            clusters.append(
                Cluster(
                    id=row['id'],
                    height=_cast_height(row['height']),
                    score=float(row['score']),
                    members=tuple(split_list(row['members'])),
                )
            )
    logger.info(f'loaded {len(clusters)} clusters')
    return ClusterGroup(clusters)
