from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _Model(BaseModel):
    # JSON en camelCase (valueDate, isBalanceCheck) como lo espera el ledger
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class AccountFormat(str, Enum):
    IBAN = "IBAN"
    FIO_UNKNOWN = "FIO_UNKNOWN"


class AccountPair(_Model):
    tenant: str
    name: str


class Transfer(_Model):
    id: str = Field(..., description="ID de movimiento (column22)")
    tenant: str
    credit: AccountPair
    debit: AccountPair
    value_date: str = Field(..., description="ISO-8601 UTC, YYYY-MM-DDTHH:MM:SSZ")
    amount: float = Field(..., ge=0, description="Siempre >= 0, el signo lo dan credit/debit")
    currency: str


class Transaction(_Model):
    id: str
    transfers: List[Transfer] = Field(..., min_length=1)


class Account(_Model):
    name: str
    format: AccountFormat
    currency: str
    is_balance_check: bool = False
