from typing import Dict, Optional

from ..cluster import Cluster, ClusterGroup
from ..config import ReportOptions
from ..constants import NCBI_TABLE, NOT_FOUND, PUBMED_URL, SRA_PROJECT_URL
from ..counts import CountMap
from ..ncbi import ListQuery, NcbiConnection, SampleInfo, fetch_samples
from ..util import logger
from . import document as doc
from .html import HtmlClusterReporter

COLUMNS = ['sample_id', 'experiment', 'project', 'pubmed', 'title']


class SampleClusterReporter(HtmlClusterReporter):
    """
    An HTML report on clusters of SRA samples. The project, publication and title of each
    sample are retrieved from NCBI before the report is written
    """

    def __init__(self, options: ReportOptions, connection: Optional[NcbiConnection] = None):
        super().__init__(options)
        self.batch_size = options.batch_size
        self.connection = connection or NcbiConnection(email=options.email, api_key=options.api_key)
        self.samples: Dict[str, SampleInfo] = {}
        self.project_counts = CountMap()
        self.pubmed_counts = CountMap()

    def _write_header(self):
        super()._write_header()
        self.project_counts = CountMap()
        self.pubmed_counts = CountMap()

    def scan_group(self, group: ClusterGroup):
        logger.info('scanning cluster group for sample data from NCBI')
        query = ListQuery(NCBI_TABLE.SRA, 'ACCN')
        for sample in group.data_points:
            if len(query) >= self.batch_size:
                self.run_query(query)
            query.add_id(sample)
        if len(query):
            self.run_query(query)
        logger.info(f'{len(self.samples)} samples cached from NCBI')

    def run_query(self, query: ListQuery):
        self.samples.update(fetch_samples(query, self.connection))

    def format_cluster_table(self, cluster: Cluster) -> str:
        proj_counts = CountMap()
        paper_counts = CountMap()
        bad_samples = 0
        rows = self.start_table(COLUMNS)
        for member in cluster.members:
            cells = [doc.cell(doc.text(member))]
            info = self.samples.get(member)
            if info is None:
                bad_samples += 1
                cells.append(doc.cell(doc.element('em', doc.text(NOT_FOUND))))
                cells.extend([doc.cell(), doc.cell(), doc.cell()])
            else:
                exp_link = doc.link(info.link_label, info.link_url) if info.link_url else None
                cells.append(doc.cell(exp_link))
                cells.append(self.group_cell(info.project_id, SRA_PROJECT_URL, proj_counts))
                cells.append(self.group_cell(info.pubmed, PUBMED_URL, paper_counts))
                cells.append(doc.cell(self.title_markup(info), 'text', 'big'))
            rows.append(doc.element('tr', *cells))
        if bad_samples > 0:
            self.add_evidence_note(f'{bad_samples} samples are no longer in NCBI.')
        self.project_counts.accumulate(proj_counts)
        self.add_evidence('project', 'projects', proj_counts)
        self.pubmed_counts.accumulate(paper_counts)
        self.add_evidence('pubmed paper', 'pubmed papers', paper_counts)
        return doc.element('table', *rows)

    @staticmethod
    def title_markup(info: SampleInfo) -> str:
        if info.title is None:
            return doc.element('em', doc.text('invalid'))
        return doc.link(info.title, info.title_url)

    @staticmethod
    def group_cell(group_id: Optional[str], url_format: str, counts: CountMap) -> str:
        """
        a table cell linking to the group of a sample. The group is counted if present
        """
        if not group_id:
            return doc.cell()
        counts.count(group_id)
        return doc.cell(doc.link(group_id, url_format.format(group_id)))

    def add_notes(self):
        self.add_count_note(self.project_counts, 'projects')
        self.add_count_note(self.pubmed_counts, 'pubmed papers')

    def add_count_note(self, group_counts: CountMap, plural: str):
        if group_counts:
            biggest, _ = group_counts.best()
            self.add_note(
                f'{group_counts.sum()} samples found in {len(group_counts)} {plural}.  Biggest was {biggest}.'
            )
