from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Sequence

from todobench.harness.config import ConfigError, HarnessConfig, config_from_env
from todobench.harness.runner import BenchmarkRunner, TargetRunResult
from todobench.harness.telemetry import JsonlRunSink, NullRunSink, RunSink

logger = logging.getLogger("todobench.cli")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Type into to-do apps and capture a performance trace and PDF")
    parser.add_argument("targets", nargs="*", help="Target names, space or comma separated")
    parser.add_argument("--output-dir", type=str, default=None, help="Directory for trace and PDF files")
    parser.add_argument("--words", type=str, default=None, help="Word list file, one word per line")
    parser.add_argument("--word-limit", type=int, default=None, help="Number of words to type")
    parser.add_argument("--timeout-ms", type=int, default=None, help="Wait budget for element lookups")
    parser.add_argument("--headed", action="store_true", help="Run with a visible browser window")
    parser.add_argument("--summary", type=str, default=None, help="Append per-target results to this JSONL file")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace, base: HarnessConfig | None = None) -> HarnessConfig:
    config = base or config_from_env()
    return config.with_overrides(
        output_dir=args.output_dir,
        words_file=args.words,
        word_limit=args.word_limit,
        timeout_ms=args.timeout_ms,
        headless=False if args.headed else None,
        summary_file=args.summary,
    )


def _summary(results: list[TargetRunResult]) -> dict[str, Any]:
    return {
        "targets": [result.to_dict() for result in results],
        "failed": [result.target for result in results if not result.success],
    }


async def _run(config: HarnessConfig, targets: Sequence[str]) -> list[TargetRunResult]:
    sink: RunSink = JsonlRunSink(config.summary_file) if config.summary_file else NullRunSink()
    runner = BenchmarkRunner(config, sink=sink)
    return await runner.run(targets)


def run(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        config = build_config(args)
    except ConfigError as exc:
        configure_logging("INFO")
        logger.error("invalid configuration: %s", exc)
        return 2
    configure_logging(config.log_level)

    if not args.targets:
        logger.info("No targets given. Available targets: %s", json.dumps(config.describe_targets(), indent=4))
        return 0

    results = asyncio.run(_run(config, args.targets))
    print(json.dumps(_summary(results), indent=2, sort_keys=True))
    return 1 if any(not result.success for result in results) else 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
