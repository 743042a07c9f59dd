from __future__ import annotations

from typing import Dict, Generator, Optional, Set

import structlog

from .models import Account, AccountFormat
from .normalize import normalize_account_number
from .statement import RawTransferRecord, Statement
from .stream import Stream

logger = structlog.get_logger(__name__)


def _accounts(statement: Statement) -> Generator[Account, None, None]:
    info = statement.info

    # 1) una entrada por contracuenta cruda; el último registro visto gana
    by_account: Dict[str, RawTransferRecord] = {}
    for record in statement.transfers:
        if record.counter_account is None:
            by_account[info.bic] = record
        else:
            by_account[record.counter_account] = record

    # 2) normalizar y emitir sin repetir nombre
    visited: Set[str] = set()
    for account, record in by_account.items():
        name = normalize_account_number(account, record.counter_bank_code or "", info.bank_id)
        fmt = AccountFormat.IBAN if name != account else AccountFormat.FIO_UNKNOWN

        if name in visited:
            continue
        visited.add(name)
        yield Account(name=name, format=fmt, currency=info.currency, is_balance_check=False)

    if info.iban not in visited:
        visited.add(info.iban)
        yield Account(name=info.iban, format=AccountFormat.IBAN, currency=info.currency, is_balance_check=False)

    logger.info("accounts_extracted", iban=info.iban, accounts=len(visited))


def extract_accounts(statement: Optional[Statement]) -> Stream[Account]:
    """
    Cuentas distintas que aparecen en el statement (contrapartes + la propia).
    El orden entre contrapartes no está garantizado; el contrato es el conjunto.
    """
    if statement is None:
        return Stream.empty(name="accounts")
    return Stream(_accounts(statement), name="accounts")
