from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import List, Optional

from rich.console import Console

from .accounts import extract_accounts
from .config import get_settings
from .errors import StatementDecodeError
from .logging import setup_logging
from .statement import Statement, load_statement
from .transfers import extract_transfers


def build_payload(statement: Statement, tenant: str, only: str = "") -> dict:
    payload: dict = {}
    if only in ("", "transactions"):
        with extract_transfers(statement, tenant) as transactions:
            payload["transactions"] = [t.model_dump(mode="json", by_alias=True) for t in transactions]
    if only in ("", "accounts"):
        with extract_accounts(statement) as accounts:
            payload["accounts"] = [a.model_dump(mode="json", by_alias=True) for a in accounts]
    return payload


def main(argv: Optional[List[str]] = None) -> int:
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Fio statement -> transacciones y cuentas del ledger")
    parser.add_argument("file", help="Ruta al JSON del statement (transactions.json)")
    parser.add_argument("--tenant", default=settings.tenant, help="Tenant (default: FIO_BCO_TENANT)")
    parser.add_argument("--out", default="", help="Ruta de salida JSON (opcional)")
    parser.add_argument("--only", choices=("transactions", "accounts"), default="", help="Emitir sólo un stream")
    args = parser.parse_args(argv)

    setup_logging()

    if not args.tenant and args.only != "accounts":
        raise SystemExit("Falta el tenant: usar --tenant o FIO_BCO_TENANT")

    statement_path = Path(args.file)
    if not statement_path.exists():
        raise SystemExit(f"No existe el archivo: {statement_path}")

    console = Console(stderr=True)
    console.print(f"Procesando: {statement_path}", style="bold")

    try:
        statement = load_statement(statement_path)
    except StatementDecodeError as exc:
        raise SystemExit(exc.detail) from exc

    payload = build_payload(statement, args.tenant, args.only)

    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
        console.print(f"OK -> {out_path}", style="bold green")
    else:
        print(json.dumps(payload, ensure_ascii=False, indent=2))

    if "transactions" in payload:
        total = sum(len(t["transfers"]) for t in payload["transactions"])
        console.print(
            f"Transacciones: {len(payload['transactions'])} (transfers: {total})", style="bold cyan"
        )
    if "accounts" in payload:
        console.print(f"Cuentas: {len(payload['accounts'])}", style="bold cyan")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
