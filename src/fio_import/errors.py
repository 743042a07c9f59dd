from __future__ import annotations

from typing import Optional


class FioImportError(Exception):
    """Error base del import."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)


class StatementDecodeError(FioImportError):
    """El documento no es JSON válido o no coincide con el esquema del statement."""

    def __init__(self, detail: str = "Invalid statement", source: Optional[str] = None):
        super().__init__(detail)
        self.source = source


class MessageError(FioImportError):
    """Mensaje del protocolo de tokens mal formado o con código desconocido."""

    def __init__(self, detail: str = "Invalid message", raw: str = ""):
        super().__init__(detail)
        self.raw = raw
