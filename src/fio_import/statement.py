"""
Modelo del statement tal como lo entrega el gateway de Fio (ib_api/rest, transactions.json).

Cada movimiento trae columnas posicionales opcionales ``columnN`` con la forma
``{"value": ..., "name": ..., "id": N}``. Una columna ausente (o con value null)
es información, no un error.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, List, Optional, Union

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .errors import StatementDecodeError

logger = structlog.get_logger(__name__)


class _Node(BaseModel):
    # el parser JSON de pydantic acepta NaN/Infinity por defecto; un monto no
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    name: str = ""
    id: int = 0


class StringNode(_Node):
    value: str


class FloatNode(_Node):
    value: float


class IntNode(_Node):
    value: int


def _value(node: Optional[_Node]) -> Any:
    return node.value if node is not None else None


class RawTransferRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    column0: Optional[StringNode] = None
    column1: Optional[FloatNode] = None
    column2: Optional[StringNode] = None
    column3: Optional[StringNode] = None
    column4: Optional[StringNode] = None
    column5: Optional[StringNode] = None
    column6: Optional[StringNode] = None
    column7: Optional[StringNode] = None
    column8: Optional[StringNode] = None
    column9: Optional[StringNode] = None
    column10: Optional[StringNode] = None
    column12: Optional[StringNode] = None
    column14: Optional[StringNode] = None
    column16: Optional[StringNode] = None
    column17: Optional[IntNode] = None
    column18: Optional[StringNode] = None
    column22: Optional[IntNode] = None
    column25: Optional[StringNode] = None
    column26: Optional[StringNode] = None

    @model_validator(mode="before")
    @classmethod
    def _drop_null_columns(cls, data: Any) -> Any:
        # Fio a veces manda {"value": null, ...}: lo tratamos igual que columna ausente
        if isinstance(data, dict):
            return {
                k: v
                for k, v in data.items()
                if v is not None and not (isinstance(v, dict) and v.get("value") is None)
            }
        return data

    @property
    def value_date(self) -> Optional[str]:
        return _value(self.column0)

    @property
    def amount(self) -> Optional[float]:
        return _value(self.column1)

    @property
    def counter_account(self) -> Optional[str]:
        return _value(self.column2)

    @property
    def counter_bank_code(self) -> Optional[str]:
        return _value(self.column3)

    @property
    def constant_symbol(self) -> Optional[str]:
        return _value(self.column4)

    @property
    def variable_symbol(self) -> Optional[str]:
        return _value(self.column5)

    @property
    def specific_symbol(self) -> Optional[str]:
        return _value(self.column6)

    @property
    def user_identification(self) -> Optional[str]:
        return _value(self.column7)

    @property
    def transfer_type(self) -> Optional[str]:
        return _value(self.column8)

    @property
    def executed_by(self) -> Optional[str]:
        return _value(self.column9)

    @property
    def counter_account_name(self) -> Optional[str]:
        return _value(self.column10)

    @property
    def counter_bank_name(self) -> Optional[str]:
        return _value(self.column12)

    @property
    def currency(self) -> Optional[str]:
        return _value(self.column14)

    @property
    def message(self) -> Optional[str]:
        return _value(self.column16)

    @property
    def instruction_id(self) -> Optional[int]:
        return _value(self.column17)

    @property
    def specification(self) -> Optional[str]:
        return _value(self.column18)

    @property
    def transfer_id(self) -> Optional[int]:
        return _value(self.column22)

    @property
    def comment(self) -> Optional[str]:
        return _value(self.column25)

    @property
    def counter_bic(self) -> Optional[str]:
        return _value(self.column26)


class StatementHeader(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True, allow_inf_nan=False)

    account_id: str = ""
    bank_id: str = ""
    currency: str
    iban: str
    bic: str = ""
    opening_balance: Optional[float] = None
    closing_balance: Optional[float] = None
    date_start: Optional[str] = None
    date_end: Optional[str] = None
    id_from: Optional[int] = None
    id_to: Optional[int] = None
    id_last_download: Optional[int] = None


class TransactionList(BaseModel):
    model_config = ConfigDict(frozen=True)

    transaction: List[RawTransferRecord] = Field(default_factory=list)

    @field_validator("transaction", mode="before")
    @classmethod
    def _none_is_empty(cls, v: Any) -> Any:
        return [] if v is None else v


class Statement(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    info: StatementHeader
    transaction_list: TransactionList = Field(default_factory=TransactionList, alias="transactionList")

    @field_validator("transaction_list", mode="before")
    @classmethod
    def _none_is_empty(cls, v: Any) -> Any:
        return {} if v is None else v

    @property
    def transfers(self) -> List[RawTransferRecord]:
        return self.transaction_list.transaction


class _Envelope(BaseModel):
    account_statement: Statement = Field(..., alias="accountStatement")


def decode_statement(payload: Union[str, bytes, dict]) -> Statement:
    """
    Decodifica el documento del gateway ``{"accountStatement": {...}}``.
    Lanza StatementDecodeError si no es JSON o no cumple el esquema.
    """
    try:
        if isinstance(payload, dict):
            envelope = _Envelope.model_validate(payload)
        else:
            envelope = _Envelope.model_validate_json(payload)
    except ValidationError as exc:
        raise StatementDecodeError(f"Statement inválido: {exc.error_count()} error(es)\n{exc}") from exc

    statement = envelope.account_statement
    logger.debug(
        "statement_decoded",
        iban=statement.info.iban,
        currency=statement.info.currency,
        records=len(statement.transfers),
    )
    return statement


def load_statement(path: Union[str, Path]) -> Statement:
    p = Path(path)
    try:
        raw = p.read_bytes()
    except OSError as exc:
        raise StatementDecodeError(f"No se puede leer el statement: {p}", source=str(p)) from exc

    try:
        return decode_statement(raw)
    except StatementDecodeError as exc:
        exc.source = str(p)
        raise
