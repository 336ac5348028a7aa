from ..cluster import Cluster
from .base import ClusterReporter


class TabularClusterReporter(ClusterReporter):
    """
    one line per cluster member, mapping the display identifier of the cluster to the member
    """

    def _write_header(self):
        self.println('cluster_id\tmember_id')

    def _format_cluster(self, cluster: Cluster, cluster_id: str):
        for member in cluster.members:
            self.println(f'{cluster_id}\t{member}')
