import os

import pandas as pd
import pytest

from svcompare.constants import COLUMNS, STRAND
from svcompare.util import bash_expands, cast, filepath, output_tabbed_file, read_bedpe, soft_cast

BEDPE_HEADER = '\t'.join(
    ['chrom1', 'start1', 'end1', 'chrom2', 'start2', 'end2', 'name', 'score', 'strand1', 'strand2', 'insLen', 'svLen']
)


def write_bedpe(path, *rows, header=None):
    lines = [] if header is None else [header]
    lines.extend(['\t'.join([str(v) for v in row]) for row in rows])
    path.write_text('\n'.join(lines) + '\n')
    return str(path)


class TestCast:
    def test_float(self):
        assert type(cast('1', float)) == type(1.0)
        assert type(cast('1', int)) != type(1.0)

    def test_boolean(self):
        assert not cast('f', bool)
        assert not cast('false', bool)
        assert not cast('0', bool)
        assert cast('T', bool)
        with pytest.raises(TypeError):
            cast('maybe', bool)

    def test_soft_cast(self):
        assert soft_cast('.', int) is None
        assert soft_cast('', float) is None
        assert soft_cast('1.5', float) == 1.5
        with pytest.raises(TypeError):
            soft_cast('x', float)


class TestBashExpands:
    def test_brackets(self, tmp_path):
        for name in ['a.bedpe', 'b.bedpe', 'c.txt']:
            (tmp_path / name).write_text('')
        result = bash_expands(str(tmp_path / '{a,b}.bedpe'))
        assert sorted([os.path.basename(f) for f in result]) == ['a.bedpe', 'b.bedpe']

    def test_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            bash_expands(str(tmp_path / '*.bedpe'))

    def test_filepath(self, tmp_path):
        (tmp_path / 'a.bedpe').write_text('')
        assert filepath(str(tmp_path / 'a.bedpe')) == str(tmp_path / 'a.bedpe')
        with pytest.raises(TypeError):
            filepath(str(tmp_path / 'b.bedpe'))


class TestReadBedpe:
    def test_coordinates(self, tmp_path):
        filename = write_bedpe(tmp_path / 'calls.bedpe', ['1', 99, 100, '1', 199, 205, 'del1', 30, '+', '-'])
        store = read_bedpe(filename)
        assert store.names() == ['del1_1', 'del1_2']
        assert (store[0].chr, store[0].start, store[0].end, store[0].strand) == ('1', 100, 100, STRAND.POS)
        assert (store[1].chr, store[1].start, store[1].end, store[1].strand) == ('1', 200, 205, STRAND.NEG)
        assert store[0].quality == 30
        assert store.partner(0) == 1

    def test_minimal_columns(self, tmp_path):
        filename = write_bedpe(tmp_path / 'calls.bedpe', ['1', 99, 100, '2', 199, 200], ['1', 9, 10, '3', 19, 20])
        store = read_bedpe(filename, placeholder_name='call')
        assert store.names() == ['call1_1', 'call2_1', 'call1_2', 'call2_2']
        assert all(b.strand == STRAND.POS for b in store)
        assert all(b.quality is None for b in store)

    def test_named_extra_columns(self, tmp_path):
        filename = write_bedpe(
            tmp_path / 'calls.bedpe',
            ['1', 99, 100, '1', 199, 200, 'a', '.', '+', '-', 5, -100],
            ['1', 99, 100, '1', 199, 200, '.', 12.5, '+', '-', '.', '.'],
            header='#' + BEDPE_HEADER,
        )
        store = read_bedpe(filename)
        assert store.names() == ['a_1', 'bedpe2_1', 'a_2', 'bedpe2_2']
        assert store[0].insertion_length == 5
        assert store[0].sv_length == -100
        assert store[0].quality is None
        assert store[1].insertion_length is None
        assert store[1].quality == 12.5

    def test_unnamed_extra_columns(self, tmp_path):
        filename = write_bedpe(tmp_path / 'calls.bedpe', ['1', 99, 100, '1', 199, 200, 'a', 1, '+', '-', 'PASS'])
        store = read_bedpe(filename)
        assert store[0].data == {'extra1': 'PASS'}

    def test_track_lines(self, tmp_path):
        filename = tmp_path / 'calls.bedpe'
        filename.write_text('track name=calls\nbrowser position 1:1-1000\n1\t99\t100\t1\t199\t200\n')
        assert len(read_bedpe(str(filename))) == 2

    def test_duplicate_names(self, tmp_path):
        filename = write_bedpe(
            tmp_path / 'calls.bedpe',
            ['1', 99, 100, '1', 199, 200, 'a'],
            ['1', 99, 100, '1', 199, 200, 'a'],
        )
        assert read_bedpe(str(filename)).names() == ['a_1', 'bedpe2_1', 'a_2', 'bedpe2_2']

    def test_empty(self, tmp_path):
        filename = tmp_path / 'calls.bedpe'
        filename.write_text('#' + BEDPE_HEADER + '\n')
        assert len(read_bedpe(str(filename))) == 0

    def test_too_few_columns(self, tmp_path):
        filename = write_bedpe(tmp_path / 'calls.bedpe', ['1', 99, 100, '1', 199])
        with pytest.raises(ValueError):
            read_bedpe(filename)

    def test_invalid_strand(self, tmp_path):
        filename = write_bedpe(tmp_path / 'calls.bedpe', ['1', 99, 100, '1', 199, 200, 'a', 1, '.', '-'])
        with pytest.raises(ValueError) as err:
            read_bedpe(filename)
        assert 'strand1' in str(err.value)
        assert 'breakpoint 1 of' in str(err.value)
        assert str(filename) in str(err.value)


class TestOutputTabbedFile:
    def test_missing_values(self, tmp_path):
        filename = str(tmp_path / 'out.tab')
        output_tabbed_file(
            pd.DataFrame({'a': [1, 2], 'b': pd.array([3, pd.NA], dtype='Int64'), 'c': ['x', None]}), filename
        )
        df = pd.read_csv(filename, sep='\t', dtype=str, keep_default_na=False)
        assert df['b'].tolist() == ['3', 'None']
        assert df['c'].tolist() == ['x', 'None']

    def test_records(self, tmp_path):
        filename = str(tmp_path / 'out.tab')
        output_tabbed_file([{COLUMNS.query_id: 'a', COLUMNS.subject_id: 'b'}], filename)
        with open(filename, 'r') as fh:
            assert fh.read().split('\n')[0] == '\t'.join([COLUMNS.query_id, COLUMNS.subject_id])
