"""
CLI entry point for budget-comparator.

Usage:
    python -m budget_comparator --url "https://...&y=2024&..."
    python -m budget_comparator --url "..." --output-format table --search salud
    python -m budget_comparator --serve --port 8080
"""

import argparse
import asyncio
import json
import sys

import structlog

from .logging_setup import setup_logging


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Year-over-year comparison of Consulta Amigable budget reports",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Compare a report against the previous year (JSON output)
  python -m budget_comparator --url "https://apps5.mineco.gob.pe/transparencia/Navegador/Navegar_7.aspx?y=2024&ap=ActProy"

  # Human-readable table, only conceptos containing "salud"
  python -m budget_comparator --url "..." --output-format table --search salud

  # Start the HTTP API (POST /api/comparar)
  python -m budget_comparator --serve --port 3000

  # Use custom settings file
  python -m budget_comparator --config /path/to/settings.yml --url "..."
        """,
    )

    parser.add_argument(
        "--url",
        type=str,
        help="Consulta Amigable report URL containing y=<year>",
    )

    parser.add_argument(
        "--search",
        type=str,
        default="",
        help="Only show conceptos containing this text (case-insensitive)",
    )

    parser.add_argument(
        "--output-format",
        choices=["json", "table"],
        default="json",
        help="Output format (default: json)",
    )

    parser.add_argument(
        "--serve",
        action="store_true",
        help="Start the HTTP API instead of running a single comparison",
    )

    parser.add_argument(
        "--host",
        type=str,
        help="API host (default: from settings)",
    )

    parser.add_argument(
        "--port",
        type=int,
        help="API port (default: from settings)",
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to settings.yml config file",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: from settings)",
    )

    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Output logs as JSON (for production)",
    )

    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version and exit",
    )

    return parser.parse_args(argv)


def format_table(result, rows, totals) -> str:
    """Render comparison rows as a fixed-width text table."""
    header = (
        f"{'Concepto':<60} {result.year_anterior:>12} {result.year_actual:>12} "
        f"{'Var. S/':>12} {'Var. %':>8}"
    )
    lines = [header, "-" * len(header)]

    for row in rows:
        lines.append(
            f"{row.concepto[:60]:<60} {row.monto_anterior:>12,} {row.monto_actual:>12,} "
            f"{row.variacion_s:>12,} {row.variacion_porcentaje:>8.1f}"
        )

    lines.append("-" * len(header))
    lines.append(
        f"{'TOTAL':<60} {totals.total_anterior:>12,} {totals.total_actual:>12,} "
        f"{totals.variacion_s:>12,} {totals.variacion_porcentaje:>8.1f}"
    )
    return "\n".join(lines)


async def main_async(args, settings):
    """Async main function."""
    from .core.differ import filter_rows, summarize_totals
    from .orchestrator import run_comparison

    result = await run_comparison(args.url, settings)

    rows = filter_rows(result.data, args.search)
    totals = summarize_totals(rows)

    if args.output_format == "table":
        print(format_table(result, rows, totals))
    else:
        payload = result.to_dict()
        payload["data"] = [row.to_dict() for row in rows]
        payload["totals"] = totals.to_dict()
        print(json.dumps(payload, ensure_ascii=False, indent=2))

    return result


def serve(settings, host=None, port=None):
    """Run the HTTP API with uvicorn."""
    import uvicorn

    from .api.app import create_app

    app = create_app(settings=settings)
    uvicorn.run(
        app,
        host=host or settings.server.host,
        port=port or settings.server.port,
        log_level=settings.logging.level.lower(),
    )


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    # Version check
    if args.version:
        from . import __version__
        print(f"budget-comparator {__version__}")
        sys.exit(0)

    from .config.loader import load_settings
    from .core.errors import ComparatorError, ValidationError

    # Configured twice: settings loading already logs
    setup_logging(args.log_level or "INFO", args.json_logs)
    settings = load_settings(args.config)

    setup_logging(
        args.log_level or settings.logging.level,
        args.json_logs or settings.logging.json,
    )
    logger = structlog.get_logger(__name__)

    if args.serve:
        serve(settings, args.host, args.port)
        sys.exit(0)

    if not args.url:
        print("error: --url is required unless --serve is given", file=sys.stderr)
        sys.exit(2)

    try:
        asyncio.run(main_async(args, settings))
        sys.exit(0)
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        sys.exit(130)
    except ValidationError as e:
        logger.error("invalid_input", error=e.message)
        sys.exit(2)
    except ComparatorError as e:
        logger.error("comparison_failed", error=e.message)
        sys.exit(1)
    except Exception as e:
        logger.exception("fatal_error", error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
