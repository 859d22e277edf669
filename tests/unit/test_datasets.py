"""Unit tests for datasets module."""

import pytest

from zfsstats.accumulators import ListAccumulator
from zfsstats.datasets import DatasetStatsGatherer
from zfsstats.errors import CommandFailedError, DatasetFieldParseError
from tests.fixtures import MockCommandRunner, MockLogger, SAMPLE_ZFS_LIST


def make_gatherer(stdout='', stderr='', exit_code=0, dataset_metrics=False, logger=None):
    runner = MockCommandRunner({r'^zfs list': (stdout, stderr, exit_code)})
    gatherer = DatasetStatsGatherer(runner, logger or MockLogger(), dataset_metrics=dataset_metrics)
    return gatherer, runner


class TestZdataset:
    """Tests for the zfs list invocation."""

    def test_builds_list_command(self):
        gatherer, runner = make_gatherer(stdout="tank\t1")
        gatherer.zdataset(['name', 'avail', 'used'])
        assert runner.last_command == 'zfs list -Hp -o name,avail,used'

    def test_uses_configured_binary(self):
        runner = MockCommandRunner()
        gatherer = DatasetStatsGatherer(runner, MockLogger(), zfs_bin='/sbin/zfs')
        gatherer.zdataset(['name'])
        assert runner.last_command == '/sbin/zfs list -Hp -o name'

    def test_default_properties(self):
        gatherer, runner = make_gatherer(stdout=SAMPLE_ZFS_LIST)
        gatherer.gather(ListAccumulator())
        runner.assert_command_executed('-o name,avail,used,usedsnap,usedds')


class TestGather:
    """Tests for DatasetStatsGatherer.gather."""

    def test_returns_joined_names_with_detail(self):
        gatherer, _ = make_gatherer(stdout="tank\t1024\nrpool\t2048", dataset_metrics=True)
        acc = ListAccumulator()
        names = gatherer.gather(acc, ['name', 'avail'])

        assert names == 'tank::rpool'
        records = acc.records_for('zfs_dataset')
        assert len(records) == 2
        assert records[0].fields == {'avail': 1024}
        assert records[0].tags == {'dataset': 'tank'}
        assert records[1].fields == {'avail': 2048}
        assert records[1].tags == {'dataset': 'rpool'}

    def test_returns_joined_names_without_detail(self):
        gatherer, _ = make_gatherer(stdout="tank\t1024\nrpool\t2048")
        acc = ListAccumulator()
        assert gatherer.gather(acc, ['name', 'avail']) == 'tank::rpool'
        assert acc.records == []

    def test_sample_output_with_default_properties(self):
        gatherer, _ = make_gatherer(stdout=SAMPLE_ZFS_LIST, dataset_metrics=True)
        acc = ListAccumulator()
        assert gatherer.gather(acc) == 'rpool::rpool/ROOT::tank'
        root = acc.records[1]
        assert root.tags == {'dataset': 'rpool/ROOT'}
        assert root.fields == {
            'avail': 10737418240,
            'used': 4294967296,
            'usedsnap': 1024,
            'usedds': 4294966272,
        }

    def test_no_datasets_yields_empty_name(self):
        gatherer, _ = make_gatherer(stdout="")
        assert gatherer.gather(ListAccumulator(), ['name', 'avail']) == ''

    def test_empty_output_in_detail_mode_is_skipped(self):
        logger = MockLogger()
        gatherer, _ = make_gatherer(stdout="", dataset_metrics=True, logger=logger)
        acc = ListAccumulator()
        assert gatherer.gather(acc, ['name', 'avail']) == ''
        assert acc.records == []
        logger.assert_logged('warning', 'Invalid number of columns')

    def test_wrong_column_count_is_skipped_in_detail_mode(self):
        logger = MockLogger()
        gatherer, _ = make_gatherer(stdout="tank\t1024\nbroken\nrpool\t2048\t9",
                                    dataset_metrics=True, logger=logger)
        acc = ListAccumulator()
        names = gatherer.gather(acc, ['name', 'avail'])

        assert names == 'tank::broken::rpool'
        assert [r.tags['dataset'] for r in acc.records] == ['tank']
        assert logger.call_count['warning'] == 2
        logger.assert_logged('warning', 'broken')

    def test_rejected_row_name_is_still_joined(self):
        gatherer, _ = make_gatherer(stdout="tank\t1024\nbroken", dataset_metrics=True)
        assert gatherer.gather(ListAccumulator(), ['name', 'avail']) == 'tank::broken'

    def test_parse_failure_aborts_all_datasets(self):
        gatherer, _ = make_gatherer(stdout="tank\tnope\nrpool\t2048", dataset_metrics=True)
        acc = ListAccumulator()
        with pytest.raises(DatasetFieldParseError) as exc_info:
            gatherer.gather(acc, ['name', 'avail'])

        assert exc_info.value.dataset == 'tank'
        assert exc_info.value.property == 'avail'
        assert exc_info.value.value == 'nope'
        assert acc.records == []

    def test_parse_failure_ignored_without_detail(self):
        gatherer, _ = make_gatherer(stdout="tank\tnope\nrpool\t2048")
        assert gatherer.gather(ListAccumulator(), ['name', 'avail']) == 'tank::rpool'

    def test_dash_value_is_parse_failure(self):
        gatherer, _ = make_gatherer(stdout="tank\t-", dataset_metrics=True)
        with pytest.raises(DatasetFieldParseError):
            gatherer.gather(ListAccumulator(), ['name', 'avail'])

    def test_command_failure_propagates(self):
        gatherer, _ = make_gatherer(stderr="The ZFS modules are not loaded.", exit_code=1)
        with pytest.raises(CommandFailedError) as exc_info:
            gatherer.gather(ListAccumulator())
        assert 'modules are not loaded' in exc_info.value.stderr
