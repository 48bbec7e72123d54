"""
Main entrypoint: run the API server, or run one analysis and print the verdict.

    python main.py serve
    python main.py scan-url "http://secure-login.example.ru"
    python main.py detect-bot --type TRANSFER --amount 500000 --old-balance 500000 --new-balance 0
    python main.py analyze-network --src-ip 203.0.113.7 --dst-port 3389 --duration 5
    python main.py quick network 8.8.8.8
    python main.py sample transaction --analyze

Env: THREATLENS_API_BASE_URL, THREATLENS_PROFILE, THREATLENS_REMOTE_ENABLED, API_HOST, API_PORT, etc.

API-only: uvicorn threatlens.api_server.app:app --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

import argparse
import asyncio
import json
import random
import sys
from typing import Any

from threatlens.threatlens_logging import get_logger

logger = get_logger("main")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="ThreatLens analyzers")
    parser.add_argument("--profile", choices=("full", "quick"), help="Scoring profile (default: THREATLENS_PROFILE)")
    parser.add_argument("--offline", action="store_true", help="Skip the remote classifier; score locally")
    parser.add_argument("--no-delay", action="store_true", help="Skip the simulated processing delay")
    parser.add_argument("--seed", type=int, help="Seed for confidence draws and samples")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("serve", help="Run the API server (uvicorn)")

    p_url = sub.add_parser("scan-url", help="Phishing scan of a URL")
    p_url.add_argument("url")

    p_bot = sub.add_parser("detect-bot", help="Bot-fraud scan of a transaction")
    p_bot.add_argument("--step", type=int, default=1)
    p_bot.add_argument("--type", default="TRANSFER")
    p_bot.add_argument("--amount", type=float, required=True)
    p_bot.add_argument("--old-balance", type=float, required=True)
    p_bot.add_argument("--new-balance", type=float, required=True)

    p_net = sub.add_parser("analyze-network", help="Threat scan of a network flow")
    p_net.add_argument("--protocol", default="TCP")
    p_net.add_argument("--src-port", type=int, default=443)
    p_net.add_argument("--dst-port", type=int, default=80)
    p_net.add_argument("--packet-size", type=int, default=1500)
    p_net.add_argument("--duration", type=int, default=120)
    p_net.add_argument("--src-ip", required=True)

    p_quick = sub.add_parser("quick", help="Dashboard quick check of one value")
    p_quick.add_argument("kind", choices=("url", "transaction", "network"))
    p_quick.add_argument("value")

    p_sample = sub.add_parser("sample", help="Generate a random transaction or network flow")
    p_sample.add_argument("kind", choices=("transaction", "network"))
    p_sample.add_argument("--analyze", action="store_true", help="Also analyze the generated sample")
    return parser


def _serve(settings: Any) -> None:
    import uvicorn

    from threatlens.api_server.app import app

    logger.info("main_server_starting", host=settings.api_host, port=settings.api_port)
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)


async def _run_command(args: argparse.Namespace, orchestrator: Any, rng: random.Random) -> dict[str, Any] | None:
    from threatlens.analysis_engine import (
        NetworkFlow,
        TransactionRecord,
        generate_random_flow,
        generate_random_transaction,
    )

    if args.command == "scan-url":
        verdict = await orchestrator.scan_url(args.url)
    elif args.command == "detect-bot":
        record = TransactionRecord(
            step=args.step,
            type=args.type,
            amount=args.amount,
            old_balance=args.old_balance,
            new_balance=args.new_balance,
        )
        verdict = await orchestrator.detect_bot(record)
    elif args.command == "analyze-network":
        flow = NetworkFlow(
            protocol=args.protocol,
            src_port=args.src_port,
            dst_port=args.dst_port,
            packet_size=args.packet_size,
            duration=args.duration,
            src_ip=args.src_ip,
        )
        verdict = await orchestrator.analyze_network(flow)
    elif args.command == "quick":
        verdict = await orchestrator.quick_scan(args.kind, args.value)
    else:
        if args.kind == "transaction":
            sample: Any = generate_random_transaction(rng)
            domain = "transaction"
        else:
            sample = generate_random_flow(rng)
            domain = "network"
        out: dict[str, Any] = {"sample": sample.to_dict()}
        if args.analyze:
            verdict = await orchestrator.analyze(domain, sample)
            out["verdict"] = verdict.to_dict() if verdict else None
        return out

    if verdict is None:
        return None
    out = verdict.to_dict()
    out["source"] = verdict.source
    return out


def main(argv: list[str] | None = None) -> int:
    """Parse args, run the command, print JSON to stdout. Returns the exit code."""
    args = _build_parser().parse_args(argv)

    from threatlens.config import get_settings
    from threatlens.core.exceptions import ThreatLensError
    from threatlens.orchestrator import AnalysisOrchestrator

    settings = get_settings()
    overrides: dict[str, Any] = {}
    if args.profile:
        overrides["profile"] = args.profile
    if args.offline:
        overrides["remote_enabled"] = False
    if args.seed is not None:
        overrides["random_seed"] = args.seed
    settings = settings.with_overrides(**overrides)

    if args.command == "serve":
        _serve(settings)
        return 0

    async def _no_sleep(_: float) -> None:
        return None

    rng = random.Random(settings.random_seed)
    try:
        orchestrator = AnalysisOrchestrator(
            settings=settings,
            rng=rng,
            sleep=_no_sleep if args.no_delay else asyncio.sleep,
        )
        result = asyncio.run(_run_command(args, orchestrator, rng))
    except ThreatLensError as e:
        logger.error("main_invalid_input", error_type=type(e).__name__, error=str(e))
        print(json.dumps({"error": str(e)}), file=sys.stderr)
        return 2
    if result is None:
        # Blank input: nothing to analyze.
        return 0
    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
