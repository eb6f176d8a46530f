"""Tests for command precondition checks."""

import pytest

from tablecmd.common.exceptions import FailureReason
from tablecmd.constants import DATASOURCE_PROVIDER_PROPERTY
from tablecmd.operations import AlterTableRename, CreateTableLike, DescribeTable, LoadData, ShowTables
from tablecmd.types import TableIdentifier
from tablecmd.validation import CatalogSnapshot, checks_for, partition_spec_failure, validate_command


class RecordingCatalog:
    """Wraps a catalog and records every read made through it."""

    def __init__(self, catalog):
        self._catalog = catalog
        self.reads = []

    def __getattr__(self, name):
        attr = getattr(self._catalog, name)
        if not callable(attr):
            return attr

        def _recorded(*args, **kwargs):
            self.reads.append((name, *args))
            return attr(*args, **kwargs)

        return _recorded


def _validate(command, catalog):
    return validate_command(command, CatalogSnapshot(catalog), DATASOURCE_PROVIDER_PROPERTY)


def _events_table(make_table):
    return make_table(
        "sales",
        columns=[("amount", "double"), ("year", "string"), ("month", "string"), ("day", "string")],
        partition_columns=["year", "month", "day"],
    )


class TestPartitionSpec:
    """Partition spec checks for LOAD DATA."""

    def test_complete_spec_passes(self, make_table):
        table = _events_table(make_table)

        assert partition_spec_failure(table, {"year": "2020", "month": "01", "day": "15"}) is None

    def test_incomplete_spec(self, make_table):
        table = _events_table(make_table)

        failure = partition_spec_failure(table, {"year": "2020", "month": "01"})

        assert failure.reason == FailureReason.PARTITION_SPEC_INCOMPLETE
        assert failure.details["partition_columns"] == ["year", "month", "day"]

    def test_missing_spec_on_partitioned_table(self, make_table):
        failure = partition_spec_failure(_events_table(make_table), None)

        assert failure.reason == FailureReason.PARTITION_SPEC_INCOMPLETE

    def test_unknown_column_is_reported_before_incompleteness(self, make_table):
        table = _events_table(make_table)

        failure = partition_spec_failure(table, {"year": "2020", "hour": "3"})

        assert failure.reason == FailureReason.UNKNOWN_PARTITION_COLUMN
        assert failure.details["column"] == "hour"
        assert "'hour'" in failure.message

    def test_unknown_column_with_full_size_spec(self, make_table):
        table = _events_table(make_table)

        failure = partition_spec_failure(table, {"year": "2020", "month": "01", "hour": "3"})

        assert failure.reason == FailureReason.UNKNOWN_PARTITION_COLUMN

    def test_spec_on_unpartitioned_table(self, make_table):
        failure = partition_spec_failure(make_table("orders"), {"year": "2020"})

        assert failure.reason == FailureReason.PARTITION_SPEC_UNEXPECTED
        assert failure.message == "LOAD DATA to non-partitioned table cannot specify partition."

    def test_empty_spec_on_unpartitioned_table(self, make_table):
        failure = partition_spec_failure(make_table("orders"), {})

        assert failure.reason == FailureReason.PARTITION_SPEC_UNEXPECTED

    def test_no_spec_on_unpartitioned_table(self, make_table):
        assert partition_spec_failure(make_table("orders"), None) is None


class TestLoadDataChecks:
    """Ordered LOAD DATA preconditions."""

    def test_missing_target(self, catalog):
        failure = _validate(LoadData(table=TableIdentifier(table="missing"), path="/x"), catalog)

        assert failure.reason == FailureReason.TARGET_NOT_FOUND
        assert failure.message == "Table in LOAD DATA does not exist: '`missing`'"

    def test_temporary_target(self, catalog):
        failure = _validate(LoadData(table=TableIdentifier(table="tmp_orders"), path="/x"), catalog)

        assert failure.reason == FailureReason.TARGET_IS_TEMPORARY

    def test_datasource_target(self, catalog):
        failure = _validate(LoadData(table=TableIdentifier(table="parquet_events"), path="/x"), catalog)

        assert failure.reason == FailureReason.UNSUPPORTED_TABLE_KIND_FOR_LOAD
        assert failure.details["provider"] == "parquet"

    def test_custom_provider_property(self, catalog, make_table):
        catalog.add_table(make_table("delta_orders", properties={"provider": "delta"}))
        command = LoadData(table=TableIdentifier(table="delta_orders"), path="/x")

        assert _validate(command, catalog) is None
        failure = validate_command(command, CatalogSnapshot(catalog), "provider")
        assert failure.reason == FailureReason.UNSUPPORTED_TABLE_KIND_FOR_LOAD

    def test_valid_partitioned_load(self, catalog):
        command = LoadData(
            table=TableIdentifier(table="events"),
            path="/x",
            partition={"year": "2020", "month": "01"},
        )

        assert _validate(command, catalog) is None

    def test_checks_stop_at_first_failure(self, catalog):
        """Once the target is missing, no further catalog reads happen."""
        recording = RecordingCatalog(catalog)

        _validate(LoadData(table=TableIdentifier(table="missing"), path="/x"), recording)

        assert [r[0] for r in recording.reads] == ["table_exists"]

    def test_each_fact_is_read_once(self, catalog):
        recording = RecordingCatalog(catalog)
        command = LoadData(
            table=TableIdentifier(table="events"),
            path="/x",
            partition={"year": "2020", "month": "01"},
        )

        assert _validate(command, recording) is None
        assert [r[0] for r in recording.reads] == ["table_exists", "get_table_metadata_option"]

    def test_checks_never_mutate(self, catalog):
        _validate(LoadData(table=TableIdentifier(table="events"), path="/x"), catalog)

        assert catalog.mutation_count == 0


class TestCreateTableLikeChecks:

    def test_missing_source(self, catalog):
        command = CreateTableLike(
            target_table=TableIdentifier(table="copy"),
            source_table=TableIdentifier(table="missing"),
        )

        failure = _validate(command, catalog)

        assert failure.reason == FailureReason.SOURCE_NOT_FOUND
        assert failure.message == "Source table in CREATE TABLE LIKE does not exist: '`missing`'"

    def test_temporary_source(self, catalog):
        command = CreateTableLike(
            target_table=TableIdentifier(table="copy"),
            source_table=TableIdentifier(table="tmp_orders"),
        )

        assert _validate(command, catalog).reason == FailureReason.SOURCE_IS_TEMPORARY

    def test_persistent_source(self, catalog):
        command = CreateTableLike(
            target_table=TableIdentifier(table="copy"),
            source_table=TableIdentifier(table="orders", database="default"),
        )

        assert _validate(command, catalog) is None


class TestAlterTableRenameChecks:

    def test_alter_table_on_view(self, catalog):
        command = AlterTableRename(
            old_name=TableIdentifier(table="orders_view"),
            new_name=TableIdentifier(table="orders_view2"),
        )

        failure = _validate(command, catalog)

        assert failure.reason == FailureReason.KIND_MISMATCH
        assert failure.message == "Cannot alter a view with ALTER TABLE. Please use ALTER VIEW instead"

    def test_alter_view_on_table(self, catalog):
        command = AlterTableRename(
            old_name=TableIdentifier(table="orders"),
            new_name=TableIdentifier(table="orders2"),
            is_view=True,
        )

        failure = _validate(command, catalog)

        assert failure.reason == FailureReason.KIND_MISMATCH
        assert failure.message == "Cannot alter a table with ALTER VIEW. Please use ALTER TABLE instead"

    @pytest.mark.parametrize("is_view", [True, False])
    def test_temporary_table_is_not_kind_checked(self, catalog, is_view):
        command = AlterTableRename(
            old_name=TableIdentifier(table="tmp_orders"),
            new_name=TableIdentifier(table="tmp_orders2"),
            is_view=is_view,
        )

        assert _validate(command, catalog) is None

    def test_unknown_name_is_left_to_the_catalog(self, catalog):
        command = AlterTableRename(
            old_name=TableIdentifier(table="missing"),
            new_name=TableIdentifier(table="other"),
        )

        assert _validate(command, catalog) is None


def test_read_only_commands_have_no_checks():
    assert checks_for(ShowTables(), DATASOURCE_PROVIDER_PROPERTY) == []
    assert checks_for(DescribeTable(table=TableIdentifier(table="t")), DATASOURCE_PROVIDER_PROPERTY) == []


def test_failure_converts_to_command_validation_error(catalog):
    failure = _validate(LoadData(table=TableIdentifier(table="missing"), path="/x"), catalog)

    error = failure.to_error("LOAD_DATA")

    assert error.reason == FailureReason.TARGET_NOT_FOUND
    assert error.command == "LOAD_DATA"
    assert error.details["table"] == "missing"
    assert error.details["reason"] == "target-not-found"
