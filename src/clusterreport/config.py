import argparse
from dataclasses import dataclass
from typing import Dict, Optional

from snakemake.utils import validate as snakemake_validate

from .error import ConfigurationError
from .schemas import SCHEMA_FILE
from .util import filepath


@dataclass
class ReportOptions:
    """
    The options controlling a cluster report

    Attributes:
        genome_file: the reference genome
        group_file: the feature grouping file
        method: name of the clustering method
        min_similarity: the clustering similarity threshold
        title_prefix: text to put in front of the report title
        max_size: the maximum allowed cluster size, None if unlimited
        batch_size: maximum number of identifiers per remote query
        sub_file: output path for the subsystem identifier mapping
        email: e-mail address for the remote service
        api_key: API key for the remote service
    """

    genome_file: Optional[str] = None
    group_file: Optional[str] = None
    method: str = 'complete'
    min_similarity: float = 0.0
    title_prefix: Optional[str] = None
    max_size: Optional[int] = None
    batch_size: int = 100
    sub_file: Optional[str] = None
    email: Optional[str] = None
    api_key: Optional[str] = None

    @classmethod
    def from_config(cls, config: Dict) -> 'ReportOptions':
        """
        build the options from a validated configuration
        """
        return ReportOptions(
            genome_file=config['reference.genome'],
            group_file=config['reference.groups'],
            method=config['cluster.method'],
            min_similarity=config['cluster.min_similarity'],
            title_prefix=config['report.title_prefix'],
            max_size=config['cluster.max_size'],
            batch_size=config['ncbi.batch_size'],
            sub_file=config['report.subsystem_mapping'],
            email=config['ncbi.email'],
            api_key=config['ncbi.api_key'],
        )


def validate_config(config: Dict) -> Dict:
    """
    Check that the input JSON config conforms to the expected schema and fill in the defaults

    Raises:
        ConfigurationError: the config does not match the schema
    """
    try:
        snakemake_validate(config, SCHEMA_FILE, set_default=True)
    except Exception as err:
        short_msg = '. '.join(
            [line for line in str(err).split('\n') if line.strip()][:3]
        )  # these can get super long
        raise ConfigurationError(short_msg) from err
    return config


class CustomHelpFormatter(argparse.ArgumentDefaultsHelpFormatter):
    """
    subclass the default help formatter to stop default printing for required arguments
    """

    def _format_args(self, action, default_metavar):
        if action.metavar is None:
            action.metavar = get_metavar(action.type)
        return super(CustomHelpFormatter, self)._format_args(action, default_metavar)

    def _get_help_string(self, action):
        if action.required:
            return action.help
        return super(CustomHelpFormatter, self)._get_help_string(action)

    def add_arguments(self, actions):
        # sort the arguments alphanumerically so they print in the help that way
        actions = sorted(actions, key=lambda x: getattr(x, 'option_strings'))
        super(CustomHelpFormatter, self).add_arguments(actions)


def get_metavar(arg_type):
    """
    For a given argument type, returns the string to be used for the metavar argument in add_argument

    Example:
        >>> get_metavar(int)
        'INT'
    """
    if arg_type == float:
        return 'FLOAT'
    elif arg_type == int:
        return 'INT'
    elif arg_type == filepath:
        return 'FILEPATH'
    return None
