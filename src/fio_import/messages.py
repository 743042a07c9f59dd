"""
Protocolo de texto con el actor de tokens: ``<código>[ <payload>]``.
El payload son campos separados por espacio.
"""
from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from .errors import MessageError

# request "Get Tokens" / response
REQ_TOKENS = "GT"
RESP_TOKENS = "TG"
# request "New Token" / response
REQ_CREATE_TOKEN = "NT"
RESP_CREATE_TOKEN = "TN"
# request "Delete Token" / response
REQ_DELETE_TOKEN = "DT"
RESP_DELETE_TOKEN = "TD"
FATAL_ERROR = "EE"

REQUESTS = frozenset({REQ_TOKENS, REQ_CREATE_TOKEN, REQ_DELETE_TOKEN})
RESPONSES = frozenset({RESP_TOKENS, RESP_CREATE_TOKEN, RESP_DELETE_TOKEN, FATAL_ERROR})
CODES = REQUESTS | RESPONSES


class Message(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    payload: List[str] = Field(default_factory=list)

    @property
    def is_request(self) -> bool:
        return self.code in REQUESTS

    @property
    def is_error(self) -> bool:
        return self.code == FATAL_ERROR

    def __str__(self) -> str:
        return format_message(self.code, *self.payload)


def format_message(code: str, *payload: str) -> str:
    if code not in CODES:
        raise MessageError(f"Código desconocido: {code!r}", raw=code)
    parts = [code]
    for field in payload:
        if not field or any(ch.isspace() for ch in field):
            raise MessageError(f"Campo de payload inválido: {field!r}", raw=code)
        parts.append(field)
    return " ".join(parts)


def parse_message(raw: str) -> Message:
    parts = (raw or "").split()
    if not parts:
        raise MessageError("Mensaje vacío", raw=raw or "")
    code, payload = parts[0], parts[1:]
    if code not in CODES:
        raise MessageError(f"Código desconocido: {code!r}", raw=raw)
    return Message(code=code, payload=payload)


def get_tokens_message() -> str:
    return format_message(REQ_TOKENS)


def create_token_message(token_value: str) -> str:
    return format_message(REQ_CREATE_TOKEN, token_value)


def delete_token_message() -> str:
    return format_message(REQ_DELETE_TOKEN)
