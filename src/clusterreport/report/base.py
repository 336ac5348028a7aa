from abc import ABC, abstractmethod
from typing import IO, Optional

from ..cluster import Cluster, ClusterGroup
from ..config import ReportOptions
from ..constants import CLUSTER_ID_FORMAT
from ..util import logger


class ClusterReporter(ABC):
    """
    Base class for cluster reports. A report is produced by calling, in order

    1. :meth:`scan_group` once with the full cluster group
    2. :meth:`open_report` with the output stream (writes the report header)
    3. :meth:`write_cluster` for each cluster, in the order they should be reported
    4. :meth:`close_report` to write the summary and flush the output

    Clusters with a single member are skipped. Every other cluster is given the next display
    identifier (CL1, CL2, ...) and passed on to :meth:`_format_cluster`
    """

    def __init__(self, options: ReportOptions):
        self.options = options
        self.output: Optional[IO[str]] = None
        self.non_trivial = 0
        self.coverage = 0

    def scan_group(self, group: ClusterGroup):
        """
        scan the cluster group in advance of the report to collect any information needed for it

        Raises:
            OSError: the information could not be retrieved
        """
        pass

    def open_report(self, output: IO[str]):
        self.output = output
        self.write_header()

    def write_header(self):
        """
        reset the report counters and write the report preamble
        """
        self.non_trivial = 0
        self.coverage = 0
        self._write_header()

    def write_cluster(self, cluster: Cluster):
        if cluster.is_trivial():
            return
        self.non_trivial += 1
        self.coverage += cluster.size
        self._format_cluster(cluster, CLUSTER_ID_FORMAT.format(self.non_trivial))

    def close_report(self):
        logger.info(f'{self.summary()}')
        self._finish()
        if self.output is not None:
            self.output.flush()

    def summary(self) -> str:
        return f'{self.non_trivial} nontrivial clusters covering {self.coverage} members.'

    def println(self, line: str = ''):
        self.output.write(line + '\n')

    @abstractmethod
    def _write_header(self):
        pass

    @abstractmethod
    def _format_cluster(self, cluster: Cluster, cluster_id: str):
        """
        write a non-trivial cluster

        Args:
            cluster: the cluster to write
            cluster_id: the display identifier of the cluster
        """
        pass

    def _finish(self):
        pass
