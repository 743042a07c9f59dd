from __future__ import annotations

import re
from typing import Optional

_IBAN_RE = re.compile(r"^[A-Z]{2}\d{2}[A-Z0-9]{10,30}$")
_CZ_ACCOUNT_RE = re.compile(r"^(?:(\d{1,6})-)?(\d{2,10})$")
_BANK_CODE_RE = re.compile(r"^\d{4}$")


def _iban_remainder(iban: str) -> int:
    # ISO 13616: mover los 4 primeros al final y letras -> 10..35
    rearranged = iban[4:] + iban[:4]
    digits = "".join(str(int(ch, 36)) for ch in rearranged)
    return int(digits) % 97


def is_valid_iban(value: str) -> bool:
    return bool(_IBAN_RE.match(value)) and _iban_remainder(value) == 1


def czech_iban(prefix: str, number: str, bank_code: str) -> str:
    bban = bank_code + prefix.zfill(6) + number.zfill(10)
    check = 98 - _iban_remainder("CZ00" + bban)
    return f"CZ{check:02d}{bban}"


def normalize_account_number(number: str, bank_code: Optional[str], native_bank_code: str) -> str:
    """
    Devuelve la forma canónica (IBAN) de una cuenta de contraparte.

    - IBAN válido (con espacios o minúsculas) -> IBAN compacto
    - número checo ``[prefijo-]número`` + código de banco de 4 dígitos -> IBAN CZ
      (si no viene código de banco se usa el del propio statement)
    - cualquier otra cosa (BIC, cuentas extranjeras, basura) -> sin cambios
    """
    compact = re.sub(r"\s+", "", number or "").upper()
    if not compact:
        return number

    if is_valid_iban(compact):
        return compact

    m = _CZ_ACCOUNT_RE.match(compact)
    if not m:
        return number

    code = (bank_code or "").strip() or (native_bank_code or "").strip()
    if not _BANK_CODE_RE.match(code):
        return number

    prefix, base = m.group(1) or "", m.group(2)
    return czech_iban(prefix, base, code)
