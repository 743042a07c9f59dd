from __future__ import annotations

import datetime
from pathlib import Path

import pytest
import structlog

from fio_import.config import get_settings
from fio_import.statement import decode_statement

SAMPLE_JSON = Path(__file__).resolve().parents[1] / "samples" / "fio_statement.json"

OWN_IBAN = "CZ0520100000002400222222"
BIC = "FIOBCZPPXXX"
TENANT = "demo"
FIXED_NOW = datetime.datetime(2020, 1, 2, 3, 4, 5, tzinfo=datetime.timezone.utc)


def _col(value, cid: int) -> dict:
    return {"value": value, "name": f"column{cid}", "id": cid}


def make_record(
    amount=None,
    transfer_id=None,
    instruction_id=None,
    counter=None,
    bank_code=None,
    date="2020-03-01+0100",
) -> dict:
    data = {}
    if date is not None:
        data["column0"] = _col(date, 0)
    if amount is not None:
        data["column1"] = _col(amount, 1)
    if counter is not None:
        data["column2"] = _col(counter, 2)
    if bank_code is not None:
        data["column3"] = _col(bank_code, 3)
    if instruction_id is not None:
        data["column17"] = _col(instruction_id, 17)
    if transfer_id is not None:
        data["column22"] = _col(transfer_id, 22)
    return data


def make_statement(records, iban: str = OWN_IBAN, bic: str = BIC, bank_id: str = "2010", currency: str = "CZK"):
    return decode_statement(
        {
            "accountStatement": {
                "info": {
                    "accountId": "2400222222",
                    "bankId": bank_id,
                    "currency": currency,
                    "iban": iban,
                    "bic": bic,
                },
                "transactionList": {"transaction": list(records)},
            }
        }
    )


@pytest.fixture
def record():
    return make_record


@pytest.fixture
def statement():
    return make_statement


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    for key in ("FIO_BCO_TENANT", "FIO_BCO_LOG_LEVEL", "FIO_BCO_LOG_JSON"):
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    structlog.reset_defaults()
