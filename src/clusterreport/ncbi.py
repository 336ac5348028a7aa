"""
module for retrieving sample metadata from the NCBI Entrez services
"""
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Dict, List, Optional

from Bio import Entrez

from .constants import NCBI_TABLE, PROGNAME, SRA_EXPERIMENT_URL
from .util import logger

RECORD_TAG = 'EXPERIMENT_PACKAGE'


class NcbiConnection:
    """
    Connection to the Entrez e-utilities. Every request is completed (and its response closed)
    before the call returns
    """

    def __init__(self, email: Optional[str] = None, api_key: Optional[str] = None):
        Entrez.tool = PROGNAME
        if email:
            Entrez.email = email
        if api_key:
            Entrez.api_key = api_key

    def search(self, table: str, term: str, retmax: int) -> Dict:
        """
        run a search and keep the results on the history server

        Returns:
            the parsed search result, including the Count, WebEnv and QueryKey
        """
        handle = Entrez.esearch(db=table, term=term, retmax=retmax, usehistory='y')
        try:
            return Entrez.read(handle)
        finally:
            handle.close()

    def fetch(self, table: str, search_result: Dict) -> ET.Element:
        """
        fetch the full XML records for a search held on the history server
        """
        handle = Entrez.efetch(
            db=table,
            query_key=search_result['QueryKey'],
            WebEnv=search_result['WebEnv'],
            retmax=int(search_result['Count']),
            retmode='xml',
        )
        try:
            data = handle.read()
        finally:
            handle.close()
        return ET.fromstring(data)


class ListQuery:
    """
    A query for a list of identifiers in a single Entrez field
    """

    def __init__(self, table: str = NCBI_TABLE.SRA, field: str = 'ACCN'):
        self.table = NCBI_TABLE.enforce(table)
        self.field = field
        self.ids: List[str] = []

    def add_id(self, identifier: str):
        self.ids.append(identifier)

    def __len__(self) -> int:
        return len(self.ids)

    def term(self) -> str:
        return ' OR '.join(f'{identifier}[{self.field}]' for identifier in self.ids)

    def run(self, connection: NcbiConnection) -> List[ET.Element]:
        """
        run the query and clear the identifier list

        Returns:
            the experiment package records found

        Raises:
            OSError: the response could not be parsed
        """
        try:
            result = connection.search(self.table, self.term(), len(self.ids))
            if int(result['Count']) == 0:
                return []
            root = connection.fetch(self.table, result)
        except (ValueError, KeyError, RuntimeError, ET.ParseError) as err:
            raise OSError(f'XML Error: {err}') from err
        finally:
            self.ids = []
        if root.tag == RECORD_TAG:
            return [root]
        return root.findall(f'.//{RECORD_TAG}')


def _text(element: Optional[ET.Element], path: str) -> str:
    if element is None:
        return ''
    return (element.findtext(path) or '').strip()


@dataclass
class SampleInfo:
    """
    the metadata displayed for a sample

    Attributes:
        title: title of the experiment, None if the record has no experiment
        title_url: link to the experiment page
        project_id: primary identifier of the study, if any
        pubmed: pubmed identifier of the study publication, if any
        link_label: text of the experiment link
        link_url: target of the experiment link
    """

    title: Optional[str] = None
    title_url: Optional[str] = None
    project_id: Optional[str] = None
    pubmed: Optional[str] = None
    link_label: Optional[str] = None
    link_url: Optional[str] = None

    @classmethod
    def from_element(cls, record: ET.Element) -> 'SampleInfo':
        info = SampleInfo()
        experiment = record.find('.//EXPERIMENT')
        if experiment is not None:
            accession = experiment.get('accession', '')
            if accession:
                exp_url = SRA_EXPERIMENT_URL.format(accession)
                info.title = _text(experiment, 'TITLE') or accession
                info.title_url = exp_url
                # an explicit experiment link replaces this one
                info.link_label = accession
                info.link_url = exp_url

        study = record.find('.//STUDY')
        info.project_id = _text(study, './/PRIMARY_ID') or None
        study_links = study.find('.//STUDY_LINKS') if study is not None else None
        if study_links is not None:
            for link in study_links:
                if _text(link, './/DB') == 'pubmed':
                    info.pubmed = _text(link, './/ID') or None
                    break

        url_link = record.find('.//EXPERIMENT_LINKS//URL_LINK')
        if url_link is not None:
            info.link_label = _text(url_link, 'LABEL')
            info.link_url = _text(url_link, 'URL')
        return info


def run_accessions(record: ET.Element) -> List[str]:
    """
    Returns:
        the accessions of the sequencing runs belonging to an experiment package

    Raises:
        OSError: the record has no run set
    """
    runs = record.find('.//RUN_SET')
    if runs is None:
        raise OSError('XML Error: experiment package has no RUN_SET')
    return [run.get('accession') for run in runs if run.get('accession')]


def fetch_samples(query: ListQuery, connection: NcbiConnection) -> Dict[str, SampleInfo]:
    """
    run a batch query and map each run accession found to its sample information
    """
    logger.info(f'retrieving batch of {len(query)} samples from NCBI')
    samples = {}
    for record in query.run(connection):
        info = SampleInfo.from_element(record)
        for accession in run_accessions(record):
            samples[accession] = info
    logger.info(f'{len(samples)} samples found in batch')
    return samples
