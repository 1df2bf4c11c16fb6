from __future__ import annotations

import argparse
import asyncio
import dataclasses
import json

from hostdash.app import serve
from hostdash.config import load_config
from hostdash.logging_setup import configure_logging
from hostdash.snapshot import build_assembler


def _serve_command(args: argparse.Namespace) -> int:
    return serve(args.host, args.port)


def _snapshot_command(args: argparse.Namespace) -> int:
    config = load_config()
    overrides = {}
    if args.mount:
        overrides["storage_mount"] = args.mount
    if args.sample_ms is not None:
        if args.sample_ms <= 0:
            raise SystemExit("--sample-ms must be positive")
        overrides["cpu_sample_ms"] = args.sample_ms
    if overrides:
        config = dataclasses.replace(config, **overrides)
    configure_logging(config.log_level)
    snapshot = asyncio.run(build_assembler(config).collect())
    print(json.dumps(snapshot.to_dict(), indent=args.indent))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hostdash")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Run the telemetry HTTP service")
    serve_parser.add_argument("--host")
    serve_parser.add_argument("--port", type=int)
    serve_parser.set_defaults(func=_serve_command)

    snapshot_parser = subparsers.add_parser("snapshot", help="Print one telemetry snapshot as JSON")
    snapshot_parser.add_argument("--indent", type=int, default=2)
    snapshot_parser.add_argument("--mount")
    snapshot_parser.add_argument("--sample-ms", type=int)
    snapshot_parser.set_defaults(func=_snapshot_command)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
