"""Unit tests for display module."""

from io import StringIO

from rich.console import Console

from zfsstats.display import build_record_table, format_tags, render_records
from zfsstats.interfaces.accumulator import MetricRecord


def make_console():
    return Console(file=StringIO(), width=120, color_system=None)


class TestFormatTags:
    """Tests for format_tags function."""

    def test_empty(self):
        assert format_tags({}) == ''

    def test_sorted_by_key(self):
        assert format_tags({'pools': 'tank', 'datasets': 'tank::tank/home'}) == \
            'datasets=tank::tank/home pools=tank'


class TestBuildRecordTable:
    """Tests for build_record_table function."""

    def test_title_includes_tags(self):
        table = build_record_table(MetricRecord('zfs_pool', {'nread': 1}, {'pool': 'tank'}))
        assert table.title.plain == 'zfs_pool [pool=tank]'

    def test_title_without_tags(self):
        table = build_record_table(MetricRecord('zfs', {}))
        assert table.title.plain == 'zfs'

    def test_one_row_per_field(self):
        table = build_record_table(MetricRecord('zfs', {'b': 2, 'a': 1, 'c': 3}))
        assert table.row_count == 3
        assert [c.header for c in table.columns] == ['Field', 'Value']


class TestRenderRecords:
    """Tests for render_records function."""

    def test_prints_each_record(self):
        console = make_console()
        records = [
            MetricRecord('zfs_pool', {'nread': 1024}, {'pool': 'tank'}),
            MetricRecord('zfs', {'arcstats_hits': 42}, {'pools': 'tank', 'datasets': ''}),
        ]
        tables = render_records(records, console=console)

        assert len(tables) == 2
        output = console.file.getvalue()
        assert 'zfs_pool [pool=tank]' in output
        assert 'nread' in output
        assert '1024' in output
        assert 'arcstats_hits' in output

    def test_fields_in_sorted_order(self):
        console = make_console()
        render_records([MetricRecord('zfs', {'zil_b': 2, 'arcstats_a': 1})], console=console)
        output = console.file.getvalue()
        assert output.index('arcstats_a') < output.index('zil_b')

    def test_no_records(self):
        console = make_console()
        assert render_records([], console=console) == []
        assert 'No records collected.' in console.file.getvalue()
