from __future__ import annotations

from conftest import BIC, FIXED_NOW, OWN_IBAN, SAMPLE_JSON, TENANT
from fio_import.accounts import extract_accounts
from fio_import.models import AccountFormat
from fio_import.statement import load_statement
from fio_import.transfers import extract_transfers


def _money_close(a: float, b: float, tol: float = 0.01) -> bool:
    return abs(a - b) <= tol


def _reconcile(statement, transactions) -> None:
    """
    Validación mínima "bancaria":
    - opening + sum(montos con signo visto desde la cuenta propia) == closing
    - cada transfer toca la cuenta propia exactamente en una pata
    """
    info = statement.info
    total = 0.0
    for tx in transactions:
        for t in tx.transfers:
            assert (t.credit.name == info.iban) != (t.debit.name == info.iban), f"Transfer sin pata propia: {t}"
            total += t.amount if t.credit.name == info.iban else -t.amount

    expected = round(info.opening_balance + total, 2)
    assert _money_close(expected, info.closing_balance), (
        f"Reconciliación falló: opening={info.opening_balance} sum={total} "
        f"expected={expected} closing={info.closing_balance}"
    )


def test_sample_transactions_structure_and_integrity():
    assert SAMPLE_JSON.exists(), f"No existe el sample: {SAMPLE_JSON}"
    statement = load_statement(SAMPLE_JSON)

    txs = list(extract_transfers(statement, TENANT, clock=lambda: FIXED_NOW))

    # 5 registros: uno sin column22 (se descarta), dos comparten ID de instrucción
    assert [t.id for t in txs] == [OWN_IBAN + "2102382863", OWN_IBAN + "2102382864", OWN_IBAN + "2102382865"]
    assert [len(t.transfers) for t in txs] == [1, 2, 1]
    assert sum(len(t.transfers) for t in txs) == 4

    incoming = txs[0].transfers[0]
    assert incoming.credit.name == OWN_IBAN
    assert incoming.debit.name == "CZ5520100000002900233333"
    assert incoming.value_date == "2012-06-29T22:00:00Z"

    fee, payment = txs[1].transfers
    assert fee.credit.name == BIC and fee.amount == 19.0
    assert payment.credit.name == "CZ6508000000192000145399" and payment.amount == 5.0

    # fecha en formato no reconocido -> hora de inicio de la pasada
    assert txs[2].transfers[0].value_date == "2020-01-02T03:04:05Z"

    _reconcile(statement, txs)


def test_sample_accounts():
    statement = load_statement(SAMPLE_JSON)

    accounts = {a.name: a for a in extract_accounts(statement)}

    assert set(accounts) == {
        "CZ5520100000002900233333",
        "CZ6508000000192000145399",
        "CZ4701000000001234567890",
        BIC,
        OWN_IBAN,
    }
    assert accounts[BIC].format == AccountFormat.FIO_UNKNOWN
    assert all(a.format == AccountFormat.IBAN for name, a in accounts.items() if name != BIC)
    assert all(a.currency == "CZK" for a in accounts.values())
