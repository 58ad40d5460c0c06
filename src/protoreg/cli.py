"""Command-line entry point: register a proto tree with a schema registry."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from protoreg.config import Config
from protoreg.errors import PipelineError
from protoreg.pipeline import PipelineDeps, plan_registration, run_pipeline
from protoreg.registry.client import ApicurioRegistryClient

logger = logging.getLogger(__name__)

__all__ = ["build_parser", "main"]

# argparse dest -> config key
_OVERRIDES = {
    "root": "scan.root",
    "registry_url": "registry.url",
    "group_id": "registry.group_id",
    "health_url": "registry.health_url",
    "verify_retries": "verify.retries",
    "verify_interval": "verify.interval",
    "deadline": "pipeline.deadline",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="protoreg",
        description="Register .proto files with a schema registry in dependency order.",
    )
    parser.add_argument("--root", help="Directory containing .proto files")
    parser.add_argument("--config", help="YAML configuration file")
    parser.add_argument("--registry-url", help="Registry API base URL")
    parser.add_argument("--group-id", help="Registry group for all artifacts")
    parser.add_argument("--verify-retries", type=int, help="Metadata polling attempts per artifact")
    parser.add_argument("--verify-interval", type=float, help="Seconds between polling attempts")
    parser.add_argument("--verify-version", action="store_true", help="Also verify the version metadata")
    parser.add_argument("--strict-cycles", action="store_true", help="Fail on import cycles instead of warning")
    parser.add_argument("--wait-ready", action="store_true", help="Wait for the registry health check first")
    parser.add_argument("--health-url", help="Registry health endpoint")
    parser.add_argument("--deadline", type=float, help="Abort the run after this many seconds")
    parser.add_argument("--dry-run", action="store_true", help="Print the registration order and exit")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    return parser


def _load_config(args: argparse.Namespace) -> Config:
    config = Config.load(args.config) if args.config else Config()
    for dest, key in _OVERRIDES.items():
        value = getattr(args, dest)
        if value is not None:
            config.set(key, value)
    if args.verify_version:
        config.set("verify.check_version", True)
    if args.strict_cycles:
        config.set("ordering.strict_cycles", True)
    if args.wait_ready:
        config.set("registry.wait_ready", True)
    config.validate()
    return config


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = _load_config(args)
        root = config.get("scan.root")

        if args.dry_run:
            graph, order = plan_registration(root, config)
            for path in order:
                print(graph.import_key_for(path))
            return 0

        client = ApicurioRegistryClient(
            config.get("registry.url"),
            timeout=config.get("registry.timeout"),
        )
        if config.get("registry.wait_ready"):
            client.wait_until_ready(
                config.get("registry.health_url"),
                retries=config.get("registry.ready_retries"),
                interval=config.get("registry.ready_interval"),
            )
        run_pipeline(root, PipelineDeps(client=client), config)
    except PipelineError as e:
        logger.error("Error registering artifacts: %s", e)
        return 1

    print("All proto artifacts registered successfully.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
