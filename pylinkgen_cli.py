#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
pylinkgen - Link-only Go bindings for Python modules

Usage:
    python pylinkgen_cli.py generate numpy                 # writes ./numpy/numpy.go
    python pylinkgen_cli.py generate numpy -o out/numpy
    python pylinkgen_cli.py generate mathx --dump-file mathx.json
    python pylinkgen_cli.py dump numpy --symbol add        # show one dumped symbol
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from pylinkgen import __version__
from pylinkgen.core.config import load_config, PyLinkGenConfig
from pylinkgen.core.exceptions import (
    PyLinkGenError,
    ConfigError,
    ConfigValidationError,
    UnsupportedSymbolKindError,
    format_exception,
)
from pylinkgen.core.logging import setup_logging_from_config
from pylinkgen.bindgen import BindingGenerator, create_source

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_UNSUPPORTED_KIND = 2


def create_parser() -> argparse.ArgumentParser:
    """Create the command line parser"""
    parser = argparse.ArgumentParser(
        prog="pylinkgen",
        description="Generate link-only Go declarations for a Python module",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s generate numpy                    # Dump numpy, write ./numpy/numpy.go
  %(prog)s generate numpy --out bindings/np  # Custom output directory
  %(prog)s generate math --source inprocess  # Introspect with this interpreter
  %(prog)s dump numpy                        # List dumped symbols
  %(prog)s dump numpy --symbol add           # Show one symbol
"""
    )
    parser.add_argument("--version", action="version", version=f"pylinkgen {__version__}")
    parser.add_argument("--config", type=Path, help="YAML configuration file")
    parser.add_argument("--log-level", choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help="Override the configured log level")

    sub = parser.add_subparsers(dest="command")

    source_opts = argparse.ArgumentParser(add_help=False)
    source_opts.add_argument("--source", choices=['subprocess', 'inprocess'],
                             help="Symbol source (default from config: subprocess)")
    source_opts.add_argument("--dump-file", type=Path,
                             help="Read the primary dump from a saved JSON file")
    source_opts.add_argument("--fetch-file", type=Path,
                             help="Read the secondary lookup from a saved JSON file (with --dump-file)")

    gen = sub.add_parser("generate", parents=[source_opts],
                         help="Generate the Go binding file for a module")
    gen.add_argument("module", help="Python module name, e.g. numpy or os.path")
    gen.add_argument("-o", "--out", dest="out", default="",
                     help="Output directory for generated Go bindings (default: ./<module>)")
    gen.add_argument("--keyword-policy", choices=['drop', 'reject'],
                     help="What to do with keyword-only parameters")
    gen.add_argument("--unsupported-kinds", choices=['collect', 'abort'],
                     help="Collect unsupported symbol kinds as warnings or stop the run")
    gen.add_argument("--no-validate", action="store_true",
                     help="Skip re-reading the generated file")

    dump = sub.add_parser("dump", parents=[source_opts], help="Print the symbol dump of a module")
    dump.add_argument("module", help="Python module name")
    dump.add_argument("--symbol", help="Only show details of this symbol")
    dump.add_argument("--json", action="store_true", help="Print the raw dump JSON")

    return parser


def _load(args) -> PyLinkGenConfig:
    config = load_config(str(args.config) if args.config else None)
    if args.log_level:
        config.log_level = args.log_level
    if getattr(args, 'source', None):
        config.source = args.source
    if getattr(args, 'keyword_policy', None):
        config.keyword_policy = args.keyword_policy
    if getattr(args, 'unsupported_kinds', None):
        config.unsupported_kind_policy = args.unsupported_kinds
    if getattr(args, 'no_validate', False):
        config.validate_output = False

    errors = config.validate()
    if errors:
        raise ConfigValidationError("; ".join(errors))

    setup_logging_from_config(config)
    return config


def run_generate(args, config: PyLinkGenConfig) -> int:
    """Generate the binding file"""
    try:
        source = create_source(config, dump_file=args.dump_file, fetch_file=args.fetch_file)
        generator = BindingGenerator(config=config, source=source)
        result = generator.generate(args.module, Path(args.out) if args.out.strip() else None)
    except UnsupportedSymbolKindError as e:
        print(f"[-] {format_exception(e)}", file=sys.stderr)
        return EXIT_UNSUPPORTED_KIND
    except PyLinkGenError as e:
        print(f"[-] {format_exception(e)}", file=sys.stderr)
        return EXIT_FAILURE

    summary = result['summary']
    print(f"[+] Generated: {result['output_file']}")
    print(f"    Declarations: {summary['declarations']}")
    if summary['requested']:
        print(f"    Secondary lookup: {summary['requested']} names, "
              f"{len(summary['unresolved'])} unresolved")
    for w in result['warnings']:
        print(f"[!] {w}", file=sys.stderr)
    return EXIT_OK


def _print_symbol(sym) -> None:
    print(f"Name: {sym.name}")
    print(f"Type: {sym.kind}")
    print(f"Sig: {sym.sig}")
    print(f"URL: {sym.url}")
    print("-----")


def run_dump(args, config: PyLinkGenConfig) -> int:
    """Print the dumped symbol table"""
    try:
        source = create_source(config, dump_file=args.dump_file, fetch_file=args.fetch_file)
        module = source.fetch(args.module)
    except PyLinkGenError as e:
        print(f"[-] {format_exception(e)}", file=sys.stderr)
        return EXIT_FAILURE

    if module.name != args.module:
        print(f"[-] import module {args.module} failed", file=sys.stderr)
        return EXIT_FAILURE

    if args.json:
        print(json.dumps(module.to_dict(), ensure_ascii=False, indent=2))
        return EXIT_OK

    if args.symbol:
        sym = module.find(args.symbol)
        if sym is None:
            print(f"Symbol '{args.symbol}' not found")
            return EXIT_FAILURE
        _print_symbol(sym)
        return EXIT_OK

    for sym in module.symbols:
        print(f"Name: {sym.name}, Type: {sym.kind}, Sig: {sym.sig}, URL: {sym.url}")
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_usage(sys.stderr)
        return EXIT_FAILURE

    try:
        config = _load(args)
    except ConfigError as e:
        print(f"[-] Failed to load configuration: {format_exception(e)}", file=sys.stderr)
        return EXIT_FAILURE

    if args.command == "generate":
        return run_generate(args, config)
    return run_dump(args, config)


if __name__ == "__main__":
    sys.exit(main())
