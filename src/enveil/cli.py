# SPDX-License-Identifier: MIT
"""
Enveil - Command Line Interface

This CLI provides:
- enveil version
- enveil scan <root> --format {text,json} --verbose --config <path>
- enveil protect <path> --action {move,encrypt,both} --quarantine <dir> --key <base64> --dry-run

Note:
- All example strings have been sanitized to avoid triggering detectors.
"""

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .core.exceptions import EncryptionFailure, EnveilConfigError, EnveilError
from .core.findings import ProtectOption


def main(argv=None):
    argv = argv if argv is not None else sys.argv[1:]
    p = argparse.ArgumentParser(prog="enveil", description="Secret detection and protection tool")
    p.add_argument("-v", "--version", action="store_true", help="print version and exit")

    sub = p.add_subparsers(dest="cmd")
    sub.add_parser("version", help="print version")

    sp = sub.add_parser("scan", help="scan a directory for secrets")
    sp.add_argument("root", nargs="?", default=".", help="path to scan")
    sp.add_argument("--verbose", action="store_true", help="report each file with secrets as it is found")
    sp.add_argument(
        "-f", "--format",
        choices=["text", "json"],
        default="text",
        help="output format (default: text)"
    )
    sp.add_argument("--config", help="path to .enveil.yml config file")

    pp = sub.add_parser("protect", help="move or encrypt sensitive files into quarantine")
    pp.add_argument("path", nargs="?", default=".", help="file or directory to protect")
    pp.add_argument(
        "--action",
        choices=[o.value for o in ProtectOption],
        default=ProtectOption.MOVE.value,
        help="protection to apply (default: move)"
    )
    pp.add_argument("--quarantine", help="quarantine directory (default: from config, enveil_secure)")
    pp.add_argument("--key", help="base64-encoded 32-byte encryption key")
    pp.add_argument("--dry-run", dest="dry_run", action="store_true", help="show what would be protected")
    pp.add_argument("--config", help="path to .enveil.yml config file")
    pp.add_argument("--verbose", action="store_true", help="log each protected file")

    args = p.parse_args(argv)

    if args.version or args.cmd == "version":
        print(__version__)
        return 0

    if args.cmd in ("scan", "protect"):
        logging.basicConfig(
            level=logging.INFO if args.verbose else logging.WARNING,
            format="%(message)s",
        )
        try:
            if args.cmd == "scan":
                return handle_scan_command(args)
            return handle_protect_command(args)
        except EnveilConfigError as e:
            print(f"CONFIG ERROR: {e}", file=sys.stderr)
            return 2

    p.print_help()
    return 0


def handle_scan_command(args):
    """Handle the scan subcommand."""
    from .scanner import load_scanner_config, scan
    from .reporting import render_json, render_text

    config = load_scanner_config(args.config, repo_root=args.root)
    try:
        report = scan(args.root, verbose=args.verbose, config=config)
    except EnveilError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.format == "json":
        print(render_json(report))
    else:
        print(render_text(report))

    return 1 if report.risky_files else 0


def handle_protect_command(args):
    """Handle the protect subcommand."""
    from .protect import decode_key, protect
    from .scanner import load_scanner_config
    from .reporting import render_protect_results

    target = Path(args.path)
    base_dir = target if target.is_dir() else target.parent
    config = load_scanner_config(args.config, repo_root=str(base_dir))

    quarantine = Path(args.quarantine or config["quarantine_dir"])
    if not quarantine.is_absolute():
        quarantine = base_dir / quarantine

    key = None
    if args.key:
        try:
            key = decode_key(args.key)
        except EncryptionFailure as e:
            print(f"Error: {e}", file=sys.stderr)
            return 2

    outcome = protect(
        target,
        args.action,
        quarantine,
        key=key,
        dry_run=args.dry_run,
        exclude_dirs=config["exclude_dirs"],
    )
    results = outcome if isinstance(outcome, list) else [outcome]

    print(render_protect_results(results))
    for r in results:
        if r.generated_key:
            print(
                f"⚠️  Generated encryption key for {r.protected_path} (save this!): {r.generated_key}",
                file=sys.stderr,
            )

    return 1 if any(not r.success for r in results) else 0


if __name__ == "__main__":
    raise SystemExit(main())
