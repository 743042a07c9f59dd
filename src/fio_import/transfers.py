from __future__ import annotations

import datetime
from typing import Callable, Generator, List, Optional

import structlog

from .models import AccountPair, Transaction, Transfer
from .normalize import normalize_account_number
from .statement import RawTransferRecord, Statement, StatementHeader
from .stream import Stream

logger = structlog.get_logger(__name__)

# column0 viene como 2016-08-31+0200
SOURCE_DATE_FORMAT = "%Y-%m-%d%z"
VALUE_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

Clock = Callable[[], datetime.datetime]


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def parse_value_date(raw: Optional[str]) -> Optional[datetime.datetime]:
    if not raw:
        return None
    try:
        parsed = datetime.datetime.strptime(raw.strip(), SOURCE_DATE_FORMAT)
    except ValueError:
        return None
    return parsed.astimezone(datetime.timezone.utc)


def format_value_date(value: datetime.datetime) -> str:
    return value.astimezone(datetime.timezone.utc).strftime(VALUE_DATE_FORMAT)


def resolve_counter_party(record: RawTransferRecord, info: StatementHeader) -> str:
    if record.counter_account is None:
        # comisiones, impuestos y pagos con tarjeta no traen contracuenta
        return info.bic
    return normalize_account_number(record.counter_account, record.counter_bank_code or "", info.bank_id)


def transaction_key(info: StatementHeader, record: RawTransferRecord) -> str:
    group_id = record.instruction_id if record.instruction_id is not None else record.transfer_id
    return info.iban + str(group_id)


def to_transfer(
    record: RawTransferRecord,
    info: StatementHeader,
    tenant: str,
    fallback_date: datetime.datetime,
) -> Transfer:
    """
    Un movimiento -> un Transfer. El signo del monto decide la pata:
    positivo entra a la cuenta propia (credit), cero o negativo sale (debit).
    """
    counter_party = resolve_counter_party(record, info)
    if record.amount > 0:
        credit, debit = info.iban, counter_party
    else:
        credit, debit = counter_party, info.iban

    value_date = parse_value_date(record.value_date)
    if value_date is None:
        logger.debug("value_date_fallback", transfer_id=record.transfer_id, raw=record.value_date)
        value_date = fallback_date

    return Transfer(
        id=str(record.transfer_id),
        tenant=tenant,
        credit=AccountPair(tenant=tenant, name=credit),
        debit=AccountPair(tenant=tenant, name=debit),
        value_date=format_value_date(value_date),
        amount=abs(record.amount),
        # TODO: usar column14 (moneda del movimiento) cuando venga informada
        currency=info.currency,
    )


def _transactions(statement: Statement, tenant: str, clock: Clock) -> Generator[Transaction, None, None]:
    info = statement.info
    now = clock()

    previous_key: Optional[str] = None
    current: List[Transfer] = []
    emitted = 0
    skipped = 0

    for idx, record in enumerate(statement.transfers):
        if record.transfer_id is None or record.amount is None:
            skipped += 1
            logger.debug(
                "transfer_skipped",
                index=idx,
                missing_transfer_id=record.transfer_id is None,
                missing_amount=record.amount is None,
            )
            continue

        key = transaction_key(info, record)

        # agrupación por adyacencia: un cambio de clave cierra la transacción en curso
        if current and key != previous_key:
            yield Transaction(id=previous_key, transfers=current)
            emitted += 1
            current = []

        previous_key = key
        current.append(to_transfer(record, info, tenant, now))

    if current:
        yield Transaction(id=previous_key, transfers=current)
        emitted += 1

    logger.info("transactions_extracted", iban=info.iban, transactions=emitted, skipped=skipped)


def extract_transfers(statement: Optional[Statement], tenant: str, clock: Clock = _utcnow) -> Stream[Transaction]:
    """
    Transacciones agrupadas del statement, en orden de origen.
    Registros consecutivos con el mismo ID de instrucción forman una Transaction;
    dos corridas no adyacentes con el mismo ID salen como transacciones separadas.
    """
    if statement is None:
        return Stream.empty(name="transfers")
    return Stream(_transactions(statement, tenant, clock), name="transfers")
