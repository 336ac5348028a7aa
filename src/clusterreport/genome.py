"""
module holding the minimal genome model needed to describe the members of feature clusters
"""
import json
import os
import re
from typing import Dict, FrozenSet, Iterator, List, Optional

from Bio import SeqIO

from .constants import FEATURE_TYPE
from .util import logger

GENBANK_EXTENSIONS = {'.gb', '.gbk', '.gbff', '.genbank'}

GENE_NAME_PATTERN = re.compile(r'^[a-z]{3}[A-Z0-9]*$')
LOCUS_TAG_PATTERN = re.compile(r'^[A-Za-z]+_?\d+$')

GENE_NAME_KEYS = {'gene', 'gene_name'}
LOCUS_TAG_KEYS = {'locustag', 'locus_tag'}


class Feature:
    """
    a single annotated feature of a genome

    Attributes:
        id: the feature identifier (the cluster member identifier)
        type: the feature type (CDS, rna, ...)
        gene: the gene name, or an empty string
        locus_tag: the locus tag, or an empty string
        function: the functional assignment
        subsystems: names of the subsystems containing the feature
    """

    def __init__(
        self,
        id: str,
        type: str = FEATURE_TYPE.CDS,
        gene: str = '',
        locus_tag: str = '',
        function: str = '',
        subsystems=None,
    ):
        self.id = id
        self.type = type
        self.gene = gene or ''
        self.locus_tag = locus_tag or ''
        self.function = function or ''
        self.subsystems: FrozenSet[str] = frozenset(subsystems or [])

    def is_peg(self) -> bool:
        return self.type in FEATURE_TYPE.values()

    def __repr__(self):
        return f'{self.__class__.__name__}(id={self.id!r}, gene={self.gene!r}, function={self.function!r})'


class Genome:
    def __init__(self, name: str, features: List[Feature]):
        self.name = name
        self.features: Dict[str, Feature] = {f.id: f for f in features}

    def get_feature(self, fid: str) -> Optional[Feature]:
        return self.features.get(fid)

    def pegs(self) -> Iterator[Feature]:
        """
        the protein-encoding features of the genome
        """
        return (f for f in self.features.values() if f.is_peg())

    def __len__(self) -> int:
        return len(self.features)

    def __contains__(self, fid) -> bool:
        return fid in self.features


def _feature_type(feat_dict: Dict) -> str:
    if feat_dict.get('type'):
        return feat_dict['type']
    match = re.search(r'\.(\w+)\.\d+$', feat_dict['id'])
    return match.group(1) if match else FEATURE_TYPE.CDS


def _pick_aliases(feat_dict: Dict):
    gene = ''
    locus_tag = ''
    for key, value in feat_dict.get('alias_pairs', []):
        if key.lower() in GENE_NAME_KEYS and not gene:
            gene = value
        elif key.lower() in LOCUS_TAG_KEYS and not locus_tag:
            locus_tag = value
    for alias in feat_dict.get('aliases', []):
        if not gene and GENE_NAME_PATTERN.match(alias):
            gene = alias
        elif not locus_tag and LOCUS_TAG_PATTERN.match(alias):
            locus_tag = alias
    return gene, locus_tag


def parse_genome_json(data: Dict) -> Genome:
    """
    parses a SEED genome typed object into a genome

    subsystem membership is taken from the role bindings of the genome-level subsystem list
    """
    subsystems_by_feature: Dict[str, set] = {}
    for subsystem in data.get('subsystems', []):
        for binding in subsystem.get('role_bindings', []):
            for fid in binding.get('features', []):
                subsystems_by_feature.setdefault(fid, set()).add(subsystem['name'])

    features = []
    for feat_dict in data.get('features', []):
        gene, locus_tag = _pick_aliases(feat_dict)
        features.append(
            Feature(
                feat_dict['id'],
                type=_feature_type(feat_dict),
                gene=gene,
                locus_tag=locus_tag,
                function=feat_dict.get('function', ''),
                subsystems=subsystems_by_feature.get(feat_dict['id']),
            )
        )
    return Genome(data.get('scientific_name', data.get('id', '')), features)


def parse_genbank(filepath: str) -> Genome:
    """
    reads the annotated features of a GenBank file. Features are identified by locus tag
    """
    features = []
    name = ''
    for record in SeqIO.parse(filepath, 'genbank'):
        name = name or record.annotations.get('organism', record.id)
        for seq_feature in record.features:
            if seq_feature.type in {'source', 'gene'}:
                continue
            qualifiers = seq_feature.qualifiers
            locus_tag = qualifiers.get('locus_tag', [''])[0]
            fid = locus_tag or qualifiers.get('protein_id', [''])[0]
            if not fid:
                continue
            features.append(
                Feature(
                    fid,
                    type=seq_feature.type,
                    gene=qualifiers.get('gene', [''])[0],
                    locus_tag=locus_tag,
                    function=qualifiers.get('product', [''])[0],
                )
            )
    return Genome(name, features)


def load_genome(filepath: str) -> Genome:
    """
    loads a genome from either a GenBank file or a genome typed object (JSON)

    Args:
        filepath: path to the genome file

    Returns:
        the genome with all of its features
    """
    if os.path.splitext(filepath)[1].lower() in GENBANK_EXTENSIONS:
        genome = parse_genbank(filepath)
    else:
        with open(filepath) as fh:
            try:
                data = json.load(fh)
            except json.JSONDecodeError as err:
                raise ValueError(f'not a valid genome typed object ({filepath}): {err}')
        genome = parse_genome_json(data)
    logger.info(f'loaded {len(genome)} features from genome {genome.name}')
    return genome
