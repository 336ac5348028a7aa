"""
module which holds all functions relating to loading reference files and writing the auxiliary outputs
"""
import csv
import os
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Tuple

import pandas as pd

from .genome import load_genome
from .util import logger, soft_cast, split_list

GROUP_FILE_COLUMNS = ['fid', 'modulons', 'regulon', 'operon', 'subsystems']
SUBSYSTEM_MAPPING_COLUMNS = ['subsystem_id', 'subsystem_name']


@dataclass(frozen=True)
class GroupAssignment:
    """
    the groups a single feature is assigned to by the grouping file

    Attributes:
        modulons: the modulons containing the feature
        regulon: the atomic regulon number (0 if unassigned)
        operon: the operon label (empty if unassigned)
        subsystems: the subsystems containing the feature
    """

    modulons: Tuple[str, ...] = ()
    regulon: int = 0
    operon: str = ''
    subsystems: Tuple[str, ...] = ()


def load_groups(*filepaths: str) -> Dict[str, GroupAssignment]:
    """
    reads the feature grouping file. The file is tab-delimited with a header line and the
    columns are used by position

    1. feature id
    2. comma-delimited list of modulons
    3. atomic regulon number
    4. operon name
    5. comma-delimited list of subsystems

    For example:

    .. code-block:: text

        fid                 modulons        regulon operon  subsystems
        fig|83333.1.peg.4   ArgR,Crp-2      12      thrLABC Threonine biosynthesis

    Returns:
        the group assignments keyed by feature id
    """
    groups: Dict[str, GroupAssignment] = {}
    for filepath in filepaths:
        df = pd.read_csv(filepath, sep='\t', dtype=str, keep_default_na=False).fillna('')
        if len(df.columns) < len(GROUP_FILE_COLUMNS):
            raise KeyError(
                f'expected {len(GROUP_FILE_COLUMNS)} columns in the grouping file but found {len(df.columns)}',
                filepath,
            )
        df = df.iloc[:, : len(GROUP_FILE_COLUMNS)]
        df.columns = GROUP_FILE_COLUMNS
        for row in df.to_dict('records'):
            regulon = soft_cast(row['regulon'].strip(), int) or 0
            groups[row['fid']] = GroupAssignment(
                modulons=tuple(dict.fromkeys(split_list(row['modulons']))),
                regulon=max(regulon, 0),
                operon=row['operon'].strip(),
                subsystems=tuple(dict.fromkeys(split_list(row['subsystems']))),
            )
    return groups


def write_subsystem_mapping(items: Iterable[Tuple[str, str]], filename: str):
    """
    writes the subsystem identifier mapping as a two column table

    Args:
        items: the (identifier, name) pairs to write
        filename: path to the output file
    """
    df = pd.DataFrame(list(items), columns=SUBSYSTEM_MAPPING_COLUMNS)
    logger.info(f'writing: {filename}')
    df.to_csv(filename, sep='\t', index=False, quoting=csv.QUOTE_NONE, escapechar='\\')


class ReferenceFile:
    # store loaded file to avoid re-loading
    CACHE = {}  # type: ignore

    LOAD_FUNCTIONS: Dict[str, Callable] = {
        'genome': load_genome,
        'groups': load_groups,
    }
    """dict: Mapping of file types to load functions"""

    def __init__(
        self,
        file_type: str,
        *filepaths: str,
        assert_exists: bool = False,
    ):
        """
        Args:
            *filepaths: list of paths to load
            file_type: Type of file to load
            assert_exists: check that all files exist

        Raises
            FileNotFoundError: when assert_exists and an input does not exist
        """
        self.name = sorted(filepaths)
        self.file_type = file_type
        self.key = (file_type, *self.name)
        self.content = None
        self.loader = self.LOAD_FUNCTIONS[self.file_type]
        if assert_exists:
            self.files_exist()

    def files_exist(self):
        for filename in self.name:
            if not os.path.exists(filename):
                raise FileNotFoundError('Missing file', filename)

    def is_empty(self):
        return not self.name

    def is_loaded(self):
        return self.content is not None

    def load(self):
        """
        load (or return) the contents of a reference file and add it to the cache

        Raises:
            OSError: the file could not be read (the original error type is kept where possible)
        """
        if self.is_loaded():
            return self
        if self.key in ReferenceFile.CACHE:
            logger.info(f'cached content: {self.name}')
            self.content = ReferenceFile.CACHE[self.key].content
            return self
        self.files_exist()
        try:
            logger.info(f'loading: {self.name}')
            self.content = self.loader(*self.name)
            ReferenceFile.CACHE[self.key] = self
        except Exception as err:
            message = 'Error in loading files: {}. {}'.format(', '.join(self.name), err)
            try:
                error = err.__class__(message)
            except TypeError:  # ex. UnicodeDecodeError needs the position arguments
                error = OSError(message)
            raise error from err
        return self

    @classmethod
    def from_path(cls, file_type: str, path: Optional[str], **kwargs) -> 'ReferenceFile':
        return ReferenceFile(file_type, *([path] if path else []), **kwargs)
