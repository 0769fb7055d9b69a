from __future__ import annotations

from datetime import time, timedelta
from decimal import Decimal

import pytest

from src.cadet_corps.cadet_corps.core.exceptions import StorageError
from src.cadet_corps.cadet_corps.database.connection import DatabaseConnection, DBConfig
from src.cadet_corps.cadet_corps.database.mysql_base import normalize_mysql_time, to_float


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, None),
        (time(9, 30, 45), time(9, 30)),
        (timedelta(hours=10, minutes=36, seconds=12), time(10, 36)),
        ("08:05:00", time(8, 5)),
        ("17:20", time(17, 20)),
    ],
)
def test_normalize_mysql_time(raw, expected):
    assert normalize_mysql_time(raw) == expected


def test_normalize_mysql_time_rejects_garbage():
    with pytest.raises(StorageError):
        normalize_mysql_time("noon")
    with pytest.raises(StorageError):
        normalize_mysql_time(930)


def test_to_float_handles_decimal_and_null():
    assert to_float(Decimal("83.33")) == pytest.approx(83.33)
    assert to_float(None) == 0.0


def test_db_config_defaults_and_one_factory_per_target():
    cfg = DBConfig.from_dict({"user": "corps", "password": "pw"})
    other = DBConfig.from_dict({"database": "cadet_corps_test"})

    assert cfg.describe() == "corps@localhost:3306/cadet_corps"
    assert DatabaseConnection.for_config(cfg) is DatabaseConnection.for_config(DBConfig.from_dict({"user": "corps", "password": "pw"}))
    assert DatabaseConnection.for_config(other).config.database == "cadet_corps_test"
