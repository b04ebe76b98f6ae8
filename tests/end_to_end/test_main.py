import json

import pandas as pd
import pysam
import pytest

from svcompare.constants import COLUMNS, SUBCOMMAND
from svcompare.main import main

QUERY_ROWS = [
    ['1', 99, 100, '1', 100, 101, 'q1', 10, '+', '-'],
    ['1', 999, 1000, '1', 1000, 1001, 'q2', 20, '+', '-'],
    ['2', 499, 500, '2', 699, 700, 'q3', 30, '+', '-'],
    ['2', 499, 500, '2', 699, 700, 'q4', 40, '+', '-'],
]

SUBJECT_ROWS = [
    ['1', 99, 100, '1', 100, 101, 's1', '.', '+', '-'],
    ['2', 499, 500, '2', 699, 700, 's2', '.', '+', '-'],
    ['2', 509, 510, '2', 709, 710, 's3', '.', '+', '-'],
]

REFERENCE_SEQ = 'ACCAGTTTTTTTTTTTTTGTCAGGACGA'


def write_rows(path, rows):
    path.write_text('\n'.join(['\t'.join([str(v) for v in row]) for row in rows]) + '\n')
    return str(path)


def read_output(filename):
    return pd.read_csv(filename, sep='\t', dtype=str, keep_default_na=False)


@pytest.fixture
def query(tmp_path):
    return write_rows(tmp_path / 'query.bedpe', QUERY_ROWS)


@pytest.fixture
def subject(tmp_path):
    return write_rows(tmp_path / 'subject.bedpe', SUBJECT_ROWS)


@pytest.fixture
def reference(tmp_path):
    filename = tmp_path / 'reference.fa'
    filename.write_text('>chr1\n{}\n'.format(REFERENCE_SEQ))
    return str(filename)


@pytest.fixture
def deletion(tmp_path):
    return write_rows(tmp_path / 'deletion.bedpe', [['chr1', 3, 4, 'chr1', 18, 19, 'del1', '.', '+', '-']])


class TestHelp:
    def test_main(self):
        with pytest.raises(SystemExit) as err:
            main(['-h'])
        assert err.value.code == 0

    @pytest.mark.parametrize('command', [SUBCOMMAND.OVERLAP, SUBCOMMAND.COUNT, SUBCOMMAND.HOMOLOGY])
    def test_subcommand(self, command):
        with pytest.raises(SystemExit) as err:
            main([command, '-h'])
        assert err.value.code == 0

    def test_missing_required(self):
        with pytest.raises(SystemExit) as err:
            main([SUBCOMMAND.OVERLAP, '-o', 'out.tab'])
        assert err.value.code != 0


class TestOverlap:
    def test_overlap(self, query, subject, tmp_path):
        output = str(tmp_path / 'overlap.tab')
        main([SUBCOMMAND.OVERLAP, '-q', query, '-s', subject, '-o', output])
        df = read_output(output)
        assert df[COLUMNS.query_id].tolist() == ['q1_1', 'q3_1', 'q4_1', 'q1_2', 'q3_2', 'q4_2']
        assert df[COLUMNS.subject_id].tolist() == ['s1_1', 's2_1', 's2_1', 's1_2', 's2_2', 's2_2']
        assert df[COLUMNS.size_error].tolist() == ['0'] * 6

    def test_overlap_max_gap(self, query, subject, tmp_path):
        output = str(tmp_path / 'overlap.tab')
        main([SUBCOMMAND.OVERLAP, '-q', query, '-s', subject, '-o', output, '--max_gap', '10'])
        df = read_output(output)
        assert len(df) == 10
        assert df[COLUMNS.local_breakpoint_error].tolist().count('10') == 4

    def test_overlap_without_size_filter(self, query, subject, tmp_path):
        output = str(tmp_path / 'overlap.tab')
        main([SUBCOMMAND.OVERLAP, '-q', query, '-s', subject, '-o', output, '--size_margin', 'None'])
        df = read_output(output)
        assert list(df.columns) == [
            COLUMNS.query_id,
            COLUMNS.subject_id,
            COLUMNS.query_hits,
            COLUMNS.subject_hits,
        ]

    def test_output_directory_created(self, query, subject, tmp_path):
        output = str(tmp_path / 'results' / 'overlap.tab')
        main([SUBCOMMAND.OVERLAP, '-q', query, '-s', subject, '-o', output])
        assert len(read_output(output)) == 6


class TestCount:
    def test_count(self, query, subject, tmp_path):
        output = str(tmp_path / 'count.tab')
        main([SUBCOMMAND.COUNT, '-q', query, '-s', subject, '-o', output])
        df = read_output(output)
        assert df[COLUMNS.breakend_id].tolist() == ['q1_1', 'q2_1', 'q3_1', 'q4_1', 'q1_2', 'q2_2', 'q3_2', 'q4_2']
        assert df[COLUMNS.overlap_count].tolist() == ['1', '0', '1', '1', '1', '0', '1', '1']

    def test_count_only_best(self, query, subject, tmp_path):
        output = str(tmp_path / 'count.tab')
        main([SUBCOMMAND.COUNT, '-q', query, '-s', subject, '-o', output, '--count_only_best'])
        df = read_output(output)
        assert df[COLUMNS.overlap_count].tolist() == ['1', '0', '0', '1', '1', '0', '0', '1']

    def test_config_file(self, query, subject, tmp_path):
        config = tmp_path / 'config.json'
        config.write_text(json.dumps({'pairing.max_gap': 10, 'pairing.count_only_best': True}))
        output = str(tmp_path / 'count.tab')
        log = str(tmp_path / 'count.log')
        main([SUBCOMMAND.COUNT, '-q', query, '-s', subject, '-o', output, '--config', str(config), '--log', log])
        df = read_output(output)
        assert df[COLUMNS.overlap_count].tolist() == ['1', '0', '0', '2', '1', '0', '0', '2']
        with open(log, 'r') as fh:
            assert 'run time' in fh.read()

    def test_command_line_wins_over_config(self, query, subject, tmp_path):
        config = tmp_path / 'config.json'
        config.write_text(json.dumps({'pairing.max_gap': 10}))
        output = str(tmp_path / 'count.tab')
        main([SUBCOMMAND.COUNT, '-q', query, '-s', subject, '-o', output, '-c', str(config), '--max_gap', '0'])
        df = read_output(output)
        assert df[COLUMNS.overlap_count].tolist() == ['1', '0', '1', '1', '1', '0', '1', '1']

    def test_unknown_config_key(self, query, subject, tmp_path):
        config = tmp_path / 'config.json'
        config.write_text(json.dumps({'pairing.maxgap': 10}))
        with pytest.raises(KeyError):
            main([SUBCOMMAND.COUNT, '-q', query, '-s', subject, '-o', str(tmp_path / 'count.tab'), '-c', str(config)])


class TestHomology:
    def test_homology(self, deletion, reference, tmp_path):
        output = str(tmp_path / 'homology.tab')
        main([SUBCOMMAND.HOMOLOGY, '-n', deletion, '-r', reference, '-o', output, '--anchor_length', '4'])
        df = read_output(output)
        assert df[COLUMNS.breakend_id].tolist() == ['del1_1', 'del1_2']
        assert df[COLUMNS.exact_homology_length].tolist() == ['2', '2']
        assert df[COLUMNS.inexact_homology_length].tolist() == ['2', '2']
        assert [float(v) for v in df[COLUMNS.inexact_homology_score]] == [4, 4]

    def test_indexed_reference(self, deletion, reference, tmp_path):
        pysam.faidx(reference)
        output = str(tmp_path / 'homology.tab')
        main([SUBCOMMAND.HOMOLOGY, '-n', deletion, '-r', reference, '-o', output, '--anchor_length', '4'])
        df = read_output(output)
        assert df[COLUMNS.exact_homology_length].tolist() == ['2', '2']

    def test_unknown_contig(self, reference, tmp_path):
        inputs = write_rows(tmp_path / 'unknown.bedpe', [['chrUn', 3, 4, 'chr1', 18, 19, 'x', '.', '+', '-']])
        output = str(tmp_path / 'homology.tab')
        main([SUBCOMMAND.HOMOLOGY, '-n', inputs, '-r', reference, '-o', output, '--anchor_length', '4'])
        df = read_output(output)
        assert df[COLUMNS.exact_homology_length].tolist()[0] == 'None'
