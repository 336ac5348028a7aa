from ..cluster import Cluster
from ..config import ReportOptions
from ..constants import FEATURE_NOT_FOUND
from ..error import ConfigurationError
from ..file_io import ReferenceFile, write_subsystem_mapping
from ..subsystems import SubsystemRegistry
from ..util import logger
from .base import ClusterReporter

HEADER = ['cluster', 'fid', 'gene', 'subsystems', 'function']


class GenomeClusterReporter(ClusterReporter):
    """
    Tab-delimited report listing the gene name, subsystems and function of each member of a
    cluster of genome features. Subsystems are written as short identifiers; the mapping from
    identifier to subsystem name can be saved alongside the report
    """

    def __init__(self, options: ReportOptions):
        super().__init__(options)
        self.reference = ReferenceFile.from_path('genome', options.genome_file, assert_exists=True)
        if self.reference.is_empty():
            raise ConfigurationError('Genome file is required for the genome report.')
        self.genome = None
        self.registry = SubsystemRegistry()

    def _write_header(self):
        self.genome = self.reference.load().content
        self.println('\t'.join(HEADER))

    def _format_cluster(self, cluster: Cluster, cluster_id: str):
        for fid in cluster.members:
            feat = self.genome.get_feature(fid)
            if feat is None:
                self.println('\t'.join([cluster_id, fid, '', '', FEATURE_NOT_FOUND]))
                continue
            sub_ids = sorted(self.registry.get_id(name) for name in sorted(feat.subsystems))
            self.println(
                '\t'.join([cluster_id, fid, feat.gene, ','.join(sub_ids), feat.function])
            )

    def _finish(self):
        if self.options.sub_file:
            logger.info(f'{len(self.registry)} subsystem identifiers assigned')
            write_subsystem_mapping(self.registry.items(), self.options.sub_file)
