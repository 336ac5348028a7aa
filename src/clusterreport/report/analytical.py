from dataclasses import dataclass
from typing import Dict, Iterable, Tuple

from ..cluster import Cluster
from ..config import ReportOptions
from ..constants import FEATURE_NOT_FOUND
from ..counts import CountMap
from ..error import ConfigurationError
from ..file_io import ReferenceFile
from ..util import logger
from . import document as doc
from .html import HtmlClusterReporter

COLUMNS = ['fid', 'gene', 'locus_tag', 'regulon', 'operon', 'modulons', 'subsystems', 'function']


@dataclass(frozen=True)
class FeatureRecord:
    """
    a genome feature together with the groups it belongs to
    """

    gene: str = ''
    locus_tag: str = ''
    function: str = ''
    operon: str = ''
    regulon: int = 0
    modulons: Tuple[str, ...] = ()
    subsystems: Tuple[str, ...] = ()

    @property
    def regulon_label(self) -> str:
        return f'AR{self.regulon}' if self.regulon > 0 else ''


def group_string(groups: Iterable[str]) -> str:
    return ', '.join(groups)


class AnalyticalClusterReporter(HtmlClusterReporter):
    """
    A comprehensive analysis of each cluster of genome features. For each feature we list the
    gene name, the functional assignment, the atomic regulon, the operon, the modulons and the
    subsystems. The groups are taken from the grouping file and each kind of group is used as
    evidence that the members of a cluster are related
    """

    def __init__(self, options: ReportOptions):
        super().__init__(options)
        genome_file = ReferenceFile.from_path('genome', options.genome_file)
        if genome_file.is_empty():
            raise ConfigurationError('Genome file is required for the features report.')
        group_file = ReferenceFile.from_path('groups', options.group_file)
        if group_file.is_empty():
            raise ConfigurationError('Group file is required for the features report.')
        genome = genome_file.load().content
        groups = group_file.load().content

        self.op_count = 0
        self.mod_count = 0
        self.reg_count = 0
        self.sub_count = 0
        self.features: Dict[str, FeatureRecord] = {}
        for feature in genome.pegs():
            assignment = groups.get(feature.id)
            if assignment is None:
                self.features[feature.id] = FeatureRecord(
                    feature.gene, feature.locus_tag, feature.function
                )
                continue
            if assignment.regulon > 0:
                self.reg_count += 1
            if assignment.operon:
                self.op_count += 1
            if assignment.modulons:
                self.mod_count += 1
            if assignment.subsystems:
                self.sub_count += 1
            self.features[feature.id] = FeatureRecord(
                gene=feature.gene,
                locus_tag=feature.locus_tag,
                function=feature.function,
                operon=assignment.operon,
                regulon=assignment.regulon,
                modulons=assignment.modulons,
                subsystems=assignment.subsystems,
            )
        logger.info(f'{len(self.features)} features loaded for the report')

    def format_cluster_table(self, cluster: Cluster) -> str:
        mod_counts = CountMap()
        op_counts = CountMap()
        reg_counts = CountMap()
        sub_counts = CountMap()
        rows = self.start_table(COLUMNS)
        for fid in cluster.members:
            feat = self.features.get(fid)
            if feat is None:
                logger.debug(f'feature {fid} is not in the genome')
                rows.append(doc.text_row([fid, '', '', '', '', '', '', FEATURE_NOT_FOUND], 2))
                continue
            rows.append(
                doc.text_row(
                    [
                        fid,
                        feat.gene,
                        feat.locus_tag,
                        feat.regulon_label,
                        feat.operon,
                        group_string(feat.modulons),
                        group_string(feat.subsystems),
                        feat.function,
                    ],
                    2,
                )
            )
            if feat.operon:
                op_counts.count(feat.operon)
            if feat.regulon > 0:
                reg_counts.count(feat.regulon_label)
            mod_counts.count_all(feat.modulons)
            sub_counts.count_all(feat.subsystems)
        self.add_evidence('modulon', 'modulons', mod_counts)
        self.add_evidence('operon', 'operons', op_counts)
        self.add_evidence('regulon', 'regulons', reg_counts)
        self.add_evidence('subsystem', 'subsystems', sub_counts)
        return doc.element('table', *rows)

    def add_notes(self):
        records = list(self.features.values())
        subsystems = {s for r in records for s in r.subsystems}
        self.add_note(f'{self.sub_count} features in {len(subsystems)} subsystems.')
        operons = {r.operon for r in records if r.operon}
        self.add_note(f'{self.op_count} features in {len(operons)} operons.')
        regulon_max = max([r.regulon for r in records], default=0)
        self.add_note(f'{self.reg_count} features in {regulon_max} regulons.')
        modulons = {m for r in records for m in r.modulons}
        self.add_note(f'{self.mod_count} features in {len(modulons)} modulons.')
