#!/usr/bin/env python3
"""Run hunt cycles on a fixed interval, or serve the API."""

import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

import uvicorn

from clawdjob.core.config import get_settings
from clawdjob.core.logging import setup_logging
from clawdjob.features.job_search.hunter import get_job_hunter

logger = setup_logging('run_agent')


async def hunt_loop(interval: float, max_cycles: Optional[int] = None) -> int:
    """Run a hunt cycle every ``interval`` seconds.

    Returns:
        Number of cycles that ran
    """
    hunter = get_job_hunter()
    cycles = 0
    while max_cycles is None or cycles < max_cycles:
        try:
            result = await hunter.run_cycle()
            logger.info(
                f"Cycle finished: {result.jobs_found} jobs found, "
                f"{result.applications_submitted} applications submitted"
            )
        except Exception as e:
            logger.error(f"Hunt cycle failed: {str(e)}")
        cycles += 1

        if max_cycles is not None and cycles >= max_cycles:
            break
        await asyncio.sleep(interval)
    return cycles


def main(argv: Optional[List[str]] = None) -> int:
    """Hunt for jobs once or on a schedule."""
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Run the ClawdJob hunting agent")
    parser.add_argument('--once', action='store_true', help='Run a single cycle and print its summary')
    parser.add_argument('--interval', type=float, default=settings.hunt_interval_seconds,
                        help='Seconds between cycles (default: %(default)s)')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')
    args = parser.parse_args(argv)

    if args.verbose:
        logger.setLevel(logging.DEBUG)

    if args.once:
        result = asyncio.run(get_job_hunter().run_cycle())
        print(json.dumps(result.to_json_dict(), indent=2))
        return 0

    try:
        asyncio.run(hunt_loop(args.interval))
    except KeyboardInterrupt:
        logger.info("Stopping hunting agent")
    return 0


def serve(argv: Optional[List[str]] = None) -> int:
    """Serve the HTTP API with uvicorn."""
    parser = argparse.ArgumentParser(description="Serve the ClawdJob API")
    parser.add_argument('--host', default='127.0.0.1', help='Bind address')
    parser.add_argument('--port', type=int, default=8000, help='Bind port')
    parser.add_argument('--reload', action='store_true', help='Reload on code changes')
    args = parser.parse_args(argv)

    uvicorn.run('clawdjob.app.main:app', host=args.host, port=args.port, reload=args.reload)
    return 0


if __name__ == "__main__":
    sys.exit(main())
