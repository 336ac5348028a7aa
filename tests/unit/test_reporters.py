import io
from unittest import mock

import pytest
from clusterreport.cluster import Cluster, ClusterGroup, read_clusters
from clusterreport.config import ReportOptions
from clusterreport.constants import REPORT_TYPE
from clusterreport.error import ConfigurationError
from clusterreport.file_io import ReferenceFile
from clusterreport.report import (
    AnalyticalClusterReporter,
    GenomeClusterReporter,
    IndentedClusterReporter,
    RawClusterReporter,
    SampleClusterReporter,
    TabularClusterReporter,
    create_reporter,
    write_report,
)

from ..util import MockConnection, get_data


@pytest.fixture
def options():
    ReferenceFile.CACHE.clear()
    return ReportOptions(
        genome_file=get_data('mock_genome.gto'),
        group_file=get_data('mock_groups.tsv'),
        method='complete',
        min_similarity=0.75,
    )


@pytest.fixture
def clusters():
    return read_clusters(get_data('mock_clusters.tsv'))


def run_report(reporter, group):
    output = io.StringIO()
    write_report(reporter, group, output)
    return output.getvalue()


class TestCreateReporter:
    @pytest.mark.parametrize(
        'report_type,cls',
        [
            (REPORT_TYPE.INDENTED, IndentedClusterReporter),
            (REPORT_TYPE.RAW, RawClusterReporter),
            (REPORT_TYPE.GENOME, GenomeClusterReporter),
            (REPORT_TYPE.FEATURES, AnalyticalClusterReporter),
            (REPORT_TYPE.TABULAR, TabularClusterReporter),
        ],
    )
    def test_known_types(self, options, report_type, cls):
        assert isinstance(create_reporter(report_type, options), cls)

    def test_samples_with_connection(self, options):
        connection = MockConnection()
        reporter = create_reporter(REPORT_TYPE.SAMPLES, options, connection=connection)
        assert isinstance(reporter, SampleClusterReporter)
        assert reporter.connection is connection

    def test_unknown_type_error(self, options):
        with pytest.raises(ConfigurationError):
            create_reporter('bad', options)


class TestClusterNumbering:
    def test_trivial_clusters_skipped(self):
        group = ClusterGroup(
            [
                Cluster('a', 1, 0.5, ('x', 'y')),
                Cluster('b', 0, 1.0, ('z',)),
                Cluster('c', 0, 1.0, ()),
                Cluster('d', 2, 0.4, ('p', 'q', 'r')),
            ]
        )
        reporter = TabularClusterReporter(ReportOptions())
        result = run_report(reporter, group)
        assert result.splitlines() == [
            'cluster_id\tmember_id',
            'CL1\tx',
            'CL1\ty',
            'CL2\tp',
            'CL2\tq',
            'CL2\tr',
        ]
        assert reporter.non_trivial == 2
        assert reporter.coverage == 5
        assert reporter.summary() == '2 nontrivial clusters covering 5 members.'

    def test_header_resets_counters(self, clusters):
        reporter = TabularClusterReporter(ReportOptions())
        first = run_report(reporter, clusters)
        second = run_report(reporter, clusters)
        assert first == second
        assert reporter.non_trivial == 2


class TestTextReporters:
    def test_indented(self, options, clusters):
        result = run_report(IndentedClusterReporter(options), clusters).splitlines()
        assert result[:4] == [
            'CL1 (1) size 3, height 2, score 0.9500',
            '    fig|83333.1.peg.2',
            '    fig|83333.1.peg.3',
            '    fig|83333.1.peg.4',
        ]
        assert result[4] == 'CL2 (3) size 3, height 1, score 0.8000'
        assert result[-1] == '2 nontrivial clusters covering 6 members.'

    def test_raw(self, options, clusters):
        result = run_report(RawClusterReporter(options), clusters).splitlines()
        assert result == [
            'cluster_id\tsize\theight\tscore\tmembers',
            'CL1\t3\t2\t0.95\tfig|83333.1.peg.2,fig|83333.1.peg.3,fig|83333.1.peg.4',
            'CL2\t3\t1\t0.8\tfig|83333.1.peg.1,fig|83333.1.peg.6,fig|83333.1.peg.9',
        ]


class TestGenomeClusterReporter:
    def test_missing_genome_error(self):
        with pytest.raises(ConfigurationError):
            GenomeClusterReporter(ReportOptions())

    def test_missing_file_error(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            GenomeClusterReporter(ReportOptions(genome_file=str(tmp_path / 'missing.gto')))

    def test_report(self, options, clusters):
        result = run_report(GenomeClusterReporter(options), clusters).splitlines()
        assert result == [
            'cluster\tfid\tgene\tsubsystems\tfunction',
            'CL1\tfig|83333.1.peg.2\tthrA\tThrBio1\tAspartokinase',
            'CL1\tfig|83333.1.peg.3\tthrB\tThrBio1\tHomoserine kinase',
            'CL1\tfig|83333.1.peg.4\tthrC\tThrBio1,ThrDeg1\tThreonine synthase',
            'CL2\tfig|83333.1.peg.1\tthrL\t\tThr operon leader peptide',
            'CL2\tfig|83333.1.peg.6\t\tHisBio1\tHistidine kinase',
            'CL2\tfig|83333.1.peg.9\t\t\t** not found **',
        ]

    def test_subsystem_mapping(self, options, clusters, tmp_path):
        options.sub_file = str(tmp_path / 'subsystems.tsv')
        run_report(GenomeClusterReporter(options), clusters)
        with open(options.sub_file) as fh:
            lines = fh.read().splitlines()
        assert lines == [
            'subsystem_id\tsubsystem_name',
            'ThrBio1\tThreonine Biosynthesis',
            'ThrDeg1\tThreonine Degradation',
            'HisBio1\tHistidine Biosynthesis',
        ]

    def test_no_mapping_by_default(self, options, clusters, tmp_path):
        reporter = GenomeClusterReporter(options)
        run_report(reporter, clusters)
        assert len(reporter.registry) == 3
        assert not list(tmp_path.iterdir())


class TestAnalyticalClusterReporter:
    def test_missing_genome_error(self, options):
        options.genome_file = None
        with pytest.raises(ConfigurationError):
            AnalyticalClusterReporter(options)

    def test_missing_groups_error(self, options):
        options.group_file = None
        with pytest.raises(ConfigurationError):
            AnalyticalClusterReporter(options)

    def test_unreadable_groups_error(self, options, tmp_path):
        bad = tmp_path / 'groups.tsv'
        bad.write_bytes(b'fid\tmodulons\tregulon\toperon\tsubsystems\nf1\t\xff\xfe\t1\top1\t\n')
        options.group_file = str(bad)
        with pytest.raises(OSError):
            AnalyticalClusterReporter(options)

    def test_global_counts(self, options):
        reporter = AnalyticalClusterReporter(options)
        assert len(reporter.features) == 6
        assert reporter.sub_count == 3
        assert reporter.op_count == 4
        assert reporter.reg_count == 4
        assert reporter.mod_count == 4

    def test_three_member_operon(self, options):
        group = ClusterGroup(
            [Cluster('7', 1, 0.9, ('fig|83333.1.peg.1', 'fig|83333.1.peg.3', 'fig|83333.1.peg.5'))]
        )
        result = run_report(AnalyticalClusterReporter(options), group)
        assert '<li>3 possible pairs.</li>' in result
        assert '<li>One pair in operon thrLABC.</li>' in result
        assert '<li>One pair in modulon ThrR.</li>' in result
        assert '<li>One pair in regulon AR1.</li>' in result
        assert 'subsystem Threonine' not in result

    def test_report(self, options, clusters):
        result = run_report(AnalyticalClusterReporter(options), clusters)
        assert result.startswith('<!DOCTYPE html>')
        assert (
            '<h1>Cluster Analysis Report using Method complete with Threshold 0.7500</h1>' in result
        )
        assert '<a href="#CL1">CL1 (1) size 3</a>' in result
        assert '<a href="#CL2">CL2 (3) size 3</a>' in result
        assert '<a name="CL1">CL1: size 3, height 2, score 0.9500</a>' in result
        assert (
            '<li>2 pairs found in 2 modulons. Largest modulon is ThrR with 2 members.</li>'
            in result
        )
        assert (
            '<li>3 pairs found in 1 operons. Largest operon is thrLABC with 3 members.</li>'
            in result
        )
        assert '<li>One pair in regulon AR1.</li>' in result
        assert (
            '<li>3 pairs found in 1 subsystems. '
            'Largest subsystem is Threonine Biosynthesis with 3 members.</li>' in result
        )
        assert '** not found **' in result
        assert '<li>2 nontrivial clusters covering 6 members.</li>' in result
        assert '<li>3 features in 2 subsystems.</li>' in result
        assert '<li>4 features in 1 operons.</li>' in result
        assert '<li>4 features in 2 regulons.</li>' in result
        assert '<li>4 features in 2 modulons.</li>' in result

    def test_evidence_order(self, options, clusters):
        result = run_report(AnalyticalClusterReporter(options), clusters)
        expected_order = [
            '3 possible pairs.',
            'modulons. Largest',
            'operons. Largest',
            'regulon AR1',
            'subsystems. Largest',
        ]
        positions = [result.index(text) for text in expected_order]
        assert positions == sorted(positions)

    def test_title_prefix_and_size_limit(self, options):
        options.title_prefix = 'E. coli'
        options.max_size = 50
        reporter = AnalyticalClusterReporter(options)
        assert (
            reporter.title()
            == 'E. coli Cluster Analysis Report using Method complete with Threshold 0.7500 and Size Limit 50'
        )


class TestSampleClusterReporter:
    @pytest.fixture
    def sample_clusters(self):
        return read_clusters(get_data('mock_sample_clusters.tsv'))

    def test_batches(self):
        connection = MockConnection()
        reporter = SampleClusterReporter(ReportOptions(batch_size=100), connection=connection)
        samples = [f'SRR{i:04d}' for i in range(250)]
        group = ClusterGroup(
            [Cluster(str(i), 1, 0.5, tuple(samples[i : i + 50])) for i in range(0, 250, 50)]
        )
        reporter.scan_group(group)
        assert [retmax for _, _, retmax in connection.searches] == [100, 100, 50]
        assert connection.searches[0][1].startswith('SRR0000[ACCN] OR SRR0001[ACCN]')
        assert connection.searches[2][1].endswith('SRR0249[ACCN]')

    def test_exact_multiple_of_batch(self):
        connection = MockConnection()
        reporter = SampleClusterReporter(ReportOptions(batch_size=2), connection=connection)
        reporter.scan_group(ClusterGroup([Cluster('1', 1, 0.5, ('a', 'b', 'c', 'd'))]))
        assert len(connection.searches) == 2

    def test_report(self, sample_clusters):
        connection = MockConnection(get_data('mock_sra.xml'))
        reporter = SampleClusterReporter(ReportOptions(batch_size=10), connection=connection)
        result = run_report(reporter, sample_clusters)
        assert len(connection.searches) == 1
        assert '<a href="#CL1">CL1 (s1) size 4</a>' in result
        assert '<li>6 possible pairs.</li>' in result
        assert '<li>1 samples are no longer in NCBI.</li>' in result
        assert (
            '<li>3 pairs found in 1 projects. Largest project is SRP001 with 3 members.</li>'
            in result
        )
        assert '<li>One pair in pubmed paper 12345.</li>' in result
        assert '<em>not found</em>' in result
        assert '<li>3 samples found in 1 projects.  Biggest was SRP001.</li>' in result
        assert '<li>2 samples found in 1 pubmed papers.  Biggest was 12345.</li>' in result
        assert 'href="https://pubmed.ncbi.nlm.nih.gov/12345/"' in result
        assert 'href="https://trace.ncbi.nlm.nih.gov/Traces/sra/?study=SRP001"' in result
        assert '>Protocol</a>' in result
        assert '<li>1 nontrivial clusters covering 4 members.</li>' in result
        assert 'SRR004' not in result

    def test_all_found_has_no_missing_note(self):
        connection = MockConnection(get_data('mock_sra.xml'))
        reporter = SampleClusterReporter(ReportOptions(), connection=connection)
        group = ClusterGroup([Cluster('1', 1, 0.5, ('SRR001', 'SRR003'))])
        result = run_report(reporter, group)
        assert 'no longer in NCBI' not in result
        assert 'pubmed paper 12345' not in result
        assert '<li>One pair in project SRP001.</li>' in result

    def test_reuse_resets_report_counts(self):
        connection = MockConnection(get_data('mock_sra.xml'))
        reporter = SampleClusterReporter(ReportOptions(), connection=connection)
        group = ClusterGroup([Cluster('1', 1, 0.5, ('SRR001', 'SRR003'))])
        first = run_report(reporter, group)
        second = run_report(reporter, group)
        assert '<li>2 samples found in 1 projects.  Biggest was SRP001.</li>' in second
        assert first == second
        assert reporter.project_counts.sum() == 2

    def test_remote_error_propagates(self):
        connection = MockConnection(get_data('mock_sra.xml'))
        connection.search = mock.Mock(side_effect=OSError('connection refused'))
        reporter = SampleClusterReporter(ReportOptions(), connection=connection)
        with pytest.raises(OSError):
            reporter.scan_group(ClusterGroup([Cluster('1', 1, 0.5, ('SRR001', 'SRR003'))]))
