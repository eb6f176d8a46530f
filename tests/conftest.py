from typing import Dict, Iterable, Optional, Tuple

import pytest

from tablecmd.catalog import InMemoryCatalog
from tablecmd.constants import DATASOURCE_PROVIDER_PROPERTY, TableType
from tablecmd.execution import CommandExecutor
from tablecmd.settings import FileSystemSettings, _reload_settings
from tablecmd.settings.main import _Settings
from tablecmd.types import (
    CatalogColumn,
    CatalogStorageFormat,
    CatalogTable,
    GenericRelation,
    StructField,
    TableIdentifier,
)

FIXED_NOW_MS = 1_700_000_000_000


def build_table(
    name: str,
    database: Optional[str] = "default",
    table_type: TableType = TableType.MANAGED,
    columns: Iterable[Tuple[str, str]] = (("id", "int"),),
    partition_columns: Iterable[str] = (),
    properties: Optional[Dict[str, str]] = None,
    location: Optional[str] = None,
    comments: Optional[Dict[str, str]] = None,
) -> CatalogTable:
    comments = comments or {}
    return CatalogTable(
        identifier=TableIdentifier(table=name, database=database),
        table_type=table_type,
        columns=[CatalogColumn(name=n, data_type=t, comment=comments.get(n)) for n, t in columns],
        partition_column_names=list(partition_columns),
        storage=CatalogStorageFormat(
            location_uri=location,
            input_format="org.apache.hadoop.mapred.TextInputFormat",
            output_format="org.apache.hadoop.hive.ql.io.HiveIgnoreKeyTextOutputFormat",
            serde="org.apache.hadoop.hive.serde2.lazy.LazySimpleSerDe",
        ),
        properties=properties or {},
        create_time=1_600_000_000_000,
        last_access_time=1_650_000_000_000,
    )


@pytest.fixture
def fixed_now() -> int:
    return FIXED_NOW_MS


@pytest.fixture
def make_table():
    return build_table


@pytest.fixture
def catalog() -> InMemoryCatalog:
    """Catalog with one table of each kind the commands care about.

    default.orders          managed, unpartitioned, with properties
    default.events          managed, partitioned by (year, month)
    default.parquet_events  datasource-backed
    default.orders_view     view
    tmp_orders              temporary (no database)
    """
    catalog = InMemoryCatalog()
    catalog.add_table(build_table(
        "orders",
        columns=[("id", "int"), ("amount", "double"), ("note", "string")],
        properties={"owner": "sales", "transient_lastDdlTime": "1600000000"},
        location="hdfs://namenode:8020/warehouse/orders",
        comments={"id": "order id"},
    ))
    catalog.add_table(build_table(
        "events",
        columns=[("id", "bigint"), ("payload", "string"), ("year", "string"), ("month", "string")],
        partition_columns=["year", "month"],
        comments={"year": "event year"},
    ))
    catalog.add_table(build_table(
        "parquet_events",
        properties={DATASOURCE_PROVIDER_PROPERTY: "parquet"},
    ))
    catalog.add_table(build_table("orders_view", table_type=TableType.VIEW))
    catalog.register_temporary_table(
        "tmp_orders",
        GenericRelation(fields=[
            StructField(name="id", data_type="int", metadata={"comment": "temp id"}),
            StructField(name="amount", data_type="double"),
        ]),
    )
    return catalog


@pytest.fixture
def settings() -> _Settings:
    return _Settings(
        filesystem=FileSystemSettings(default_name="hdfs://namenode:8020"),
        load_user_name="alice",
    )


@pytest.fixture
def executor(catalog: InMemoryCatalog, settings: _Settings) -> CommandExecutor:
    return CommandExecutor(catalog, settings, clock=lambda: FIXED_NOW_MS)


@pytest.fixture
def clean_settings(monkeypatch):
    """Reload the settings singleton from a clean environment, and again afterwards."""
    for name in ("TABLECMD_FS_DEFAULT_NAME", "FS_DEFAULT_NAME", "TABLECMD_LOAD_USER_NAME", "TABLECMD_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    _reload_settings()
    yield monkeypatch
    monkeypatch.undo()
    _reload_settings()
