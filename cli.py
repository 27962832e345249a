#!/usr/bin/env python3
"""
Omnigage Imports — Command Line Interface
Upload CSV/XLSX files and create contact imports in an Omnigage account.

Usage:
    python cli.py import /Users/Shared/import-example.xlsx
    python cli.py import data/ --host https://sandbox.omnigage.io/api/v1/
    python cli.py status
"""
import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from config.settings import config
from tools.imports.errors import ImportPipelineError
from tools.imports.models import ImportResult
from tools.imports.pipeline import ContactImportPipeline
from tools.imports.resolver import SUPPORTED_EXTENSIONS


def setup_logging(debug: bool = False):
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _collect_files(source: Path) -> list:
    """Directories expand to every supported file beneath them."""
    if source.is_dir():
        files = []
        for ext in SUPPORTED_EXTENSIONS:
            files.extend(source.rglob(f"*{ext}"))
        return sorted(files)
    # Files (and missing paths) go to the pipeline, which reports them
    return [source]


def _mask(value: str) -> str:
    if not value:
        return "(not set)"
    return value[:4] + "…" if len(value) > 4 else "****"


def cmd_import(args) -> int:
    """Run one pipeline per file. Returns the process exit code."""
    settings = config.omnigage
    if args.host:
        settings = replace(settings, host=args.host)

    if not settings.is_configured:
        print("ERROR: OMNIGAGE_TOKEN_KEY, OMNIGAGE_TOKEN_SECRET and OMNIGAGE_ACCOUNT_KEY must be set")
        return 1

    sources = args.paths or ([config.imports.file_path] if config.imports.file_path else [])
    if not sources:
        print("ERROR: no file given and OMNIGAGE_IMPORT_PATH not set")
        return 1

    files = []
    for source in sources:
        files.extend(_collect_files(Path(source)))
    if not files:
        print("No supported files found.")
        print(f"Supported types: {', '.join(sorted(SUPPORTED_EXTENSIONS))}")
        return 0

    print(f"\n{'='*60}")
    print(f"Omnigage Import → {settings.host}")
    print(f"Files:  {len(files)}")
    print(f"{'='*60}\n")

    results = []
    for i, filepath in enumerate(files, 1):
        print(f"[{i}/{len(files)}] File: {filepath.name}")
        result = ImportResult(filename=filepath.name)
        try:
            ContactImportPipeline(settings).run(filepath, result=result)
        except (ImportPipelineError, OSError) as e:
            print(f"  ERROR: {e}")
        else:
            print(f"  Upload ID: {result.upload_id}")
            print(f"  Import ID: {result.import_id}")
        results.append(result)

    ok = [r for r in results if r.succeeded]
    failed = [r for r in results if not r.succeeded]

    print(f"\n{'='*60}")
    print(f"Summary: {len(ok)} imported, {len(failed)} failed")
    for r in failed:
        last_ok = r.history[-2].value if len(r.history) > 1 else "start"
        print(f"  {r.filename}: failed after {last_ok} — {r.error}")
    print(f"{'='*60}\n")

    return 1 if failed else 0


def cmd_status(args) -> int:
    """Show which settings are configured."""
    settings = config.omnigage
    print("Omnigage Imports — Configuration")
    print("=" * 40)
    print(f"Host:         {settings.host}")
    print(f"Token key:    {_mask(settings.token_key)}")
    print(f"Token secret: {'set' if settings.token_secret else '(not set)'}")
    print(f"Account key:  {_mask(settings.account_key)}")
    print(f"Timeout:      {settings.timeout}s")
    print(f"Default file: {config.imports.file_path or '(not set)'}")
    print(f"\n{'✅ Ready' if settings.is_configured else '❌ Credentials missing'}")
    return 0 if settings.is_configured else 1


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Omnigage Imports — upload contacts from CSV/XLSX")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")

    # import command
    import_parser = subparsers.add_parser("import", help="Upload files and create contact imports")
    import_parser.add_argument("paths", nargs="*", help="CSV/XLSX files or directories (recursive)")
    import_parser.add_argument("--host", type=str, default=None, help="Override the API host (e.g. sandbox)")

    # status command
    subparsers.add_parser("status", help="Check configuration")

    args = parser.parse_args(argv)
    setup_logging(args.debug or config.debug)

    if args.command == "import":
        return cmd_import(args)
    elif args.command == "status":
        return cmd_status(args)
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
