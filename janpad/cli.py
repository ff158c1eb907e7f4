"""Interface de linha de comando para operar a geocodificação do Janpad."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from janpad.domain import GEOCODABLE_LEVELS
from janpad.services.geocoding import build_geocoding_container
from janpad.services.geocoding.boundaries import (
    DEFAULT_BUFFER_DEGREES,
    BoundaryFileError,
    envelope_from_geojson,
    load_feature_collection,
)
from janpad.services.geocoding.errors import ConfigurationError
from janpad.settings import get_log_level

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

EXIT_FAILURES = 1
EXIT_CONFIGURATION = 2


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Janpad - geocodificação de unidades administrativas"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    geocode = subparsers.add_parser(
        "geocode", help="Geocodifica um lote de unidades pendentes de um nível"
    )
    geocode.add_argument("level", choices=GEOCODABLE_LEVELS, help="Nível a geocodificar")
    geocode.add_argument(
        "--batch-size",
        type=int,
        default=None,
        help="Quantidade de candidatos no lote (padrão: GEOCODING_DEFAULT_BATCH_SIZE)",
    )
    geocode.add_argument(
        "--dry-run",
        action="store_true",
        help="Consulta e valida sem gravar coordenadas",
    )
    geocode.add_argument(
        "--metrics-file",
        type=Path,
        help="Exporta o resultado completo para um arquivo JSON",
    )

    status = subparsers.add_parser(
        "status", help="Mostra o andamento da geocodificação por nível"
    )

    pending = subparsers.add_parser(
        "pending", help="Lista candidatos pendentes e a consulta que seria enviada"
    )
    pending.add_argument("level", choices=GEOCODABLE_LEVELS, help="Nível a inspecionar")
    pending.add_argument(
        "--limit", type=int, default=10, help="Quantidade de exemplos (padrão: 10)"
    )

    audit = subparsers.add_parser(
        "audit", help="Revalida coordenadas gravadas e limpa as reprovadas"
    )
    audit.add_argument(
        "--level",
        choices=GEOCODABLE_LEVELS,
        default=None,
        help="Limita a auditoria a um nível",
    )
    audit.add_argument(
        "--dry-run",
        action="store_true",
        help="Lista as coordenadas inválidas sem alterá-las",
    )

    bounds = subparsers.add_parser(
        "bounds",
        help="Calcula o envelope do distrito a partir de um GeoJSON de limites",
    )
    bounds.add_argument("source", help="Caminho local ou URL http(s) do FeatureCollection")
    bounds.add_argument(
        "--buffer",
        type=float,
        default=DEFAULT_BUFFER_DEGREES,
        help=f"Margem em graus somada a cada lado (padrão: {DEFAULT_BUFFER_DEGREES})",
    )

    subparsers.add_parser("serve", help="Inicia a API REST com o Uvicorn")

    # Nível de log por subcomando (também lê JANPAD_LOG_LEVEL)
    for sp in (geocode, status, pending, audit, bounds):
        sp.add_argument(
            "--log-level",
            default=None,
            help="Nível de log: DEBUG, INFO, WARNING, ERROR (padrão INFO)",
        )

    return parser.parse_args(argv)


def configure_logging(console: Console, level_name: str | None) -> None:
    handler = RichHandler(console=console, markup=False, rich_tracebacks=True)
    logging.basicConfig(
        level=getattr(logging, str(level_name or get_log_level()).upper(), logging.INFO),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = parse_args(argv)
    console = Console()
    configure_logging(console, getattr(args, "log_level", None))
    logger = logging.getLogger("janpad.cli")

    if args.command == "serve":
        from janpad.api import run

        run()
        return 0

    if args.command == "bounds":
        try:
            envelope = envelope_from_geojson(
                load_feature_collection(args.source), buffer=args.buffer
            )
        except (BoundaryFileError, ValueError) as exc:
            console.print(f"[red]{exc}[/red]")
            return EXIT_CONFIGURATION
        console.print_json(data=envelope.to_mapping())
        console.print(f"GEOCODING_ENVELOPE={envelope.to_env()}")
        return 0

    try:
        container = build_geocoding_container()
    except ConfigurationError as exc:
        console.print(f"[red]Configuração inválida: {exc}[/red]")
        return EXIT_CONFIGURATION

    try:
        return _dispatch(args, container, console, logger)
    except ConfigurationError as exc:
        console.print(f"[red]Configuração inválida: {exc}[/red]")
        return EXIT_CONFIGURATION
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        return EXIT_CONFIGURATION
    finally:
        container.close()


def _dispatch(args: argparse.Namespace, container: Any, console: Console, logger: logging.Logger) -> int:
    if args.command == "geocode":
        batch_size = (
            args.batch_size if args.batch_size is not None else container.config.default_batch_size
        )
        with console.status(
            f"Geocodificando até {batch_size} unidade(s) do nível {args.level}...",
            spinner="dots",
        ):
            result = container.batch_job.run(args.level, batch_size, dry_run=args.dry_run)
        payload = result.to_mapping()
        console.print_json(data=payload)
        if args.metrics_file:
            _write_metrics_file(args.metrics_file, payload)
            console.log(f"Métricas salvas em '{args.metrics_file}'.")
        if result.failed:
            logger.warning("Lote finalizado com %d falha(s)", result.failed)
            return EXIT_FAILURES
        return 0

    if args.command == "status":
        console.print(_status_table(container.status_service.status()))
        return 0

    if args.command == "pending":
        report = container.status_service.pending_report(args.level, args.limit)
        console.print_json(data=report)
        return 0

    if args.command == "audit":
        with console.status("Auditando coordenadas gravadas...", spinner="dots"):
            result = container.audit_job.run(level=args.level, dry_run=args.dry_run)
        console.print_json(data=result.to_mapping())
        if result.errors:
            logger.warning("Auditoria finalizada com %d erro(s)", len(result.errors))
            return EXIT_FAILURES
        return 0

    raise ValueError(f"Comando desconhecido: {args.command}")


def _status_table(status: dict[str, Any]) -> Table:
    table = Table(title="Geocodificação por nível")
    table.add_column("Nível")
    table.add_column("Total", justify="right")
    table.add_column("Geocodificadas", justify="right")
    table.add_column("Pendentes", justify="right")
    table.add_column("%", justify="right")
    for key, values in status.items():
        table.add_row(
            key,
            str(values["total"]),
            str(values["geocoded"]),
            str(values["pending"]),
            str(values["percentage"]),
        )
    return table


def _write_metrics_file(path: Path, payload: dict[str, Any]) -> None:
    try:
        with path.open("w", encoding="utf-8") as stream:
            json.dump(payload, stream, ensure_ascii=False)
            stream.write("\n")
    except OSError as exc:
        logging.getLogger("janpad.cli").error(
            "Falha ao escrever métricas em %s: %s", path, exc
        )


if __name__ == "__main__":
    sys.exit(main())
