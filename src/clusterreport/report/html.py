from abc import abstractmethod
from typing import List

from ..cluster import Cluster
from ..config import ReportOptions
from ..constants import REPORT_TITLE
from ..counts import CountMap
from . import document as doc
from .base import ClusterReporter
from .evidence import describe_evidence, possible_pairs


class HtmlClusterReporter(ClusterReporter):
    """
    Base class for cluster reports written as an HTML page. The page starts with a table of
    contents and a summary section. Each non-trivial cluster then has a section of its own,
    described by a list of evidence bullet points and a table of the members
    """

    def __init__(self, options: ReportOptions):
        super().__init__(options)
        self.method = options.method
        self.threshold = options.min_similarity
        self.title_prefix = options.title_prefix
        self.max_size = options.max_size
        self.sections: List[str] = []
        self.contents: List[str] = []
        self.notes: List[str] = []
        self.evidence: List[str] = []

    def title(self) -> str:
        title = f'Cluster Analysis Report using Method {self.method} with Threshold {self.threshold:1.4f}'
        if self.title_prefix:
            title = f'{self.title_prefix} {title}'
        if self.max_size is not None:
            title += f' and Size Limit {self.max_size}'
        return title

    def _write_header(self):
        # the table of contents and the notes are filled in as the report progresses but are
        # rendered ahead of the cluster sections
        self.sections = []
        self.contents = [doc.element('a', doc.text('Summary Statistics'), href='#summary')]
        self.notes = []
        self.evidence = []

    def _format_cluster(self, cluster: Cluster, cluster_id: str):
        size = cluster.size
        self.contents.append(
            doc.element('a', doc.text(f'{cluster_id} ({cluster.id}) size {size}'), href=f'#{cluster_id}')
        )
        self.evidence = [doc.text(f'{possible_pairs(size)} possible pairs.')]
        heading = doc.element(
            'h2',
            doc.anchor(
                f'{cluster_id}: size {size}, height {cluster.height}, score {cluster.score:1.4f}',
                cluster_id,
            ),
        )
        table = self.format_cluster_table(cluster)
        self.sections.append(doc.element('div', heading, doc.bullet_list(self.evidence), table))

    @abstractmethod
    def format_cluster_table(self, cluster: Cluster) -> str:
        """
        Returns:
            the HTML table describing the members of the cluster
        """
        pass

    @abstractmethod
    def add_notes(self):
        """
        add the report-wide statistics to the summary section
        """
        pass

    def add_evidence(self, dimension: str, plural: str, counts: CountMap):
        """
        add a bullet describing the pairs of cluster members sharing a group of the given kind

        Args:
            dimension: name of the grouping
            plural: plural name of the grouping
            counts: number of cluster members in each group
        """
        note = describe_evidence(dimension, plural, counts)
        if note:
            self.evidence.append(doc.text(note))

    def add_evidence_note(self, note: str):
        self.evidence.append(doc.text(note))

    def add_note(self, note: str):
        self.notes.append(doc.text(note))

    def start_table(self, columns: List[str]) -> List[str]:
        """
        Returns:
            the rows of a new cluster table, starting with the column headings
        """
        return [doc.header_row(columns)]

    def _finish(self):
        self.add_note(self.summary())
        self.add_notes()
        body = [
            doc.element('h1', doc.text(self.title())),
            doc.element('h2', doc.text('Table of Contents')),
            doc.bullet_list(self.contents),
            doc.element('h2', doc.anchor('Summary Statistics', 'summary')),
            doc.bullet_list(self.notes),
            *self.sections,
        ]
        self.println(doc.page(REPORT_TITLE, body))
