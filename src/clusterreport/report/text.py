"""
plain text reports that need no information beyond the clusters themselves
"""
from ..cluster import Cluster
from .base import ClusterReporter

INDENT = '    '


class IndentedClusterReporter(ClusterReporter):
    """
    a heading line for each cluster followed by its members, one per line

    Example:

    .. code-block:: text

        CL1 (17) size 3, height 2, score 0.9500
            fig|83333.1.peg.4
            fig|83333.1.peg.5
            fig|83333.1.peg.6
    """

    def _write_header(self):
        pass

    def _format_cluster(self, cluster: Cluster, cluster_id: str):
        self.println(
            f'{cluster_id} ({cluster.id}) size {cluster.size}, height {cluster.height}, score {cluster.score:1.4f}'
        )
        for member in cluster.members:
            self.println(INDENT + member)

    def _finish(self):
        self.println()
        self.println(self.summary())


class RawClusterReporter(ClusterReporter):
    """
    one tab-delimited line per cluster with the members in a comma-delimited list
    """

    def _write_header(self):
        self.println('\t'.join(['cluster_id', 'size', 'height', 'score', 'members']))

    def _format_cluster(self, cluster: Cluster, cluster_id: str):
        self.println(
            '\t'.join(
                [
                    cluster_id,
                    str(cluster.size),
                    str(cluster.height),
                    str(cluster.score),
                    ','.join(cluster.members),
                ]
            )
        )
