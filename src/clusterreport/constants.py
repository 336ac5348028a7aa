"""
module responsible for the controlled vocabularies and constants used throughout the clusterreport package
"""
from typing import List

PROGNAME: str = 'clusterreport'


class ReportNamespace:
    """
    Namespace to hold module constants

    Example:
        >>> class COLOUR(ReportNamespace):
        ...     RED = 'red'
        >>> COLOUR.values()
        ['red']
    """

    @classmethod
    def items(cls) -> List:
        return [(k, v) for k, v in cls.__dict__.items() if not k.startswith('_')]

    @classmethod
    def values(cls) -> List:
        return [v for k, v in cls.items()]

    @classmethod
    def enforce(cls, value):
        """
        checks that the current namespace has a given value

        Returns:
            the input value

        Raises:
            KeyError: the value did not exist

        Example:
            >>> REPORT_TYPE.enforce('features')
            'features'
        """
        if value not in cls.values():
            raise KeyError('value {0} is not a valid member of '.format(repr(value)), cls.values())
        return value


class REPORT_TYPE(ReportNamespace):
    """
    The supported cluster report formats

    Attributes:
        INDENTED: human-readable text, one heading per cluster with the members indented below it
        RAW: one tab-delimited line per cluster
        GENOME: tab-delimited feature report joined against a reference genome
        FEATURES: HTML analysis of a feature clustering against a genome and a grouping file
        SAMPLES: HTML analysis of an SRA sample clustering against NCBI metadata
        TABULAR: two-column cluster/member table
    """

    INDENTED: str = 'indented'
    RAW: str = 'raw'
    GENOME: str = 'genome'
    FEATURES: str = 'features'
    SAMPLES: str = 'samples'
    TABULAR: str = 'tabular'


class NCBI_TABLE(ReportNamespace):
    """
    Entrez databases queried for sample metadata
    """

    SRA: str = 'sra'


class FEATURE_TYPE(ReportNamespace):
    """
    Feature types treated as protein-encoding genes
    """

    CDS: str = 'CDS'
    PEG: str = 'peg'


CLUSTER_ID_FORMAT: str = 'CL{}'
"""format string for the display identifier of a non-trivial cluster"""

NOT_FOUND: str = 'not found'
"""marker for a sample missing from the remote metadata"""

FEATURE_NOT_FOUND: str = '** not found **'
"""function string for a feature missing from the reference genome"""

SRA_EXPERIMENT_URL: str = 'https://www.ncbi.nlm.nih.gov/sra/?term={}'
SRA_PROJECT_URL: str = 'https://trace.ncbi.nlm.nih.gov/Traces/sra/?study={}'
PUBMED_URL: str = 'https://pubmed.ncbi.nlm.nih.gov/{}/'

REPORT_TITLE: str = 'Clustering Report'
"""title of the HTML page (shown by the browser, not in the body)"""
