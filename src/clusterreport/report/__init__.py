"""
the cluster report engine. Use :func:`create_reporter` to build the reporter for a report type
and :func:`write_report` to run it over a cluster group
"""
from typing import IO

from ..cluster import ClusterGroup
from ..config import ReportOptions
from ..constants import REPORT_TYPE
from ..error import ConfigurationError
from ..util import logger
from .analytical import AnalyticalClusterReporter
from .base import ClusterReporter
from .genome import GenomeClusterReporter
from .sample import SampleClusterReporter
from .tabular import TabularClusterReporter
from .text import IndentedClusterReporter, RawClusterReporter

REPORTERS = {
    REPORT_TYPE.INDENTED: IndentedClusterReporter,
    REPORT_TYPE.RAW: RawClusterReporter,
    REPORT_TYPE.GENOME: GenomeClusterReporter,
    REPORT_TYPE.FEATURES: AnalyticalClusterReporter,
    REPORT_TYPE.SAMPLES: SampleClusterReporter,
    REPORT_TYPE.TABULAR: TabularClusterReporter,
}


def create_reporter(report_type: str, options: ReportOptions, **kwargs) -> ClusterReporter:
    """
    Args:
        report_type: one of the REPORT_TYPE values
        options: the report options
        **kwargs: passed to the reporter (ex. the connection for the samples report)

    Raises:
        ConfigurationError: the report type is unknown or the options do not support it
    """
    try:
        report_type = REPORT_TYPE.enforce(report_type)
    except KeyError:
        raise ConfigurationError(
            f'invalid report type ({report_type}). Expected one of: {", ".join(REPORT_TYPE.values())}'
        )
    return REPORTERS[report_type](options, **kwargs)


def write_report(reporter: ClusterReporter, group: ClusterGroup, output: IO[str]):
    """
    produce the full report for a cluster group, reporting the clusters in group order
    """
    reporter.scan_group(group)
    reporter.open_report(output)
    for cluster in group:
        reporter.write_cluster(cluster)
    reporter.close_report()
    logger.info(f'{len(group)} clusters processed')
