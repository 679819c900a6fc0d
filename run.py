#!/usr/bin/env python3
"""
UTH Advisor - Server Startup Script

Usage:
    python run.py [--host HOST] [--port PORT] [--reload]
                  [--strategy NAME | --strategy-file PATH]
                  [--stats-file PATH] [--log-level LEVEL]
"""

import argparse
import os
import uvicorn

from uthadvisor.core.strategy import available_strategies


def main():
    parser = argparse.ArgumentParser(description="UTH Advisor Server")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind to")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    parser.add_argument("--strategy", choices=available_strategies(),
                        help="Built-in strategy variant")
    parser.add_argument("--strategy-file", help="JSON strategy table to use instead")
    parser.add_argument("--stats-file", help="Where session stats are kept")
    parser.add_argument("--log-level", default=None, help="Logging level (INFO, DEBUG, ...)")
    args = parser.parse_args()

    # Settings travel through the environment so the reloader sees them too
    overrides = {
        "UTH_STRATEGY": args.strategy,
        "UTH_STRATEGY_FILE": args.strategy_file,
        "UTH_STATS_FILE": args.stats_file,
        "UTH_LOG_LEVEL": args.log_level,
    }
    for key, value in overrides.items():
        if value:
            os.environ[key] = value

    uvicorn.run(
        "uthadvisor.server.app:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
