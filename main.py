"""
Main application module.

Command-line entry point: serve the game API, or check a guess / initials
from the terminal.
"""

import argparse
import logging
import sys
from typing import List, Optional

from initials_generator import generate_initials
from logger_config import setup_logging, flush_logs
from main_config import get_server_config, load_config
from name_matcher import is_correct_guess

logger = logging.getLogger('main')

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="WikiGuess trivia game server and tools")
    parser.add_argument('--diagnostic', action='store_true', help='Enable DEBUG logging on the console')
    subparsers = parser.add_subparsers(dest='command', required=True)

    serve = subparsers.add_parser('serve', help='Run the game API')
    serve.add_argument('--host', help='Bind address (default from config)')
    serve.add_argument('--port', type=int, help='Port (default from config)')
    serve.add_argument('--config', help='Path to config.json')

    check = subparsers.add_parser('check', help='Check whether a guess matches a name')
    check.add_argument('name', help='Full name, e.g. "Ludwig van Beethoven"')
    check.add_argument('guess', help='Guess, e.g. "van Beethoven"')

    initials = subparsers.add_parser('initials', help='Print the initials for a name')
    initials.add_argument('name')

    return parser

def serve(host: Optional[str], port: Optional[int], config_path: Optional[str]):
    import uvicorn
    import api

    config = load_config(config_path)
    server_config = get_server_config(config)
    host = host or server_config["host"]
    port = port or int(server_config["port"])

    api.initialize_services(config)
    logger.info(f"Starting WikiGuess API on {host}:{port}")
    uvicorn.run(api.app, host=host, port=port, log_level="info")

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(diagnostic=args.diagnostic)

    try:
        if args.command == 'serve':
            serve(args.host, args.port, args.config)
        elif args.command == 'check':
            matched = is_correct_guess(args.guess, args.name)
            print(f"{args.guess!r} {'matches' if matched else 'does not match'} {args.name!r}")
            return 0 if matched else 1
        elif args.command == 'initials':
            print(generate_initials(args.name))
        return 0
    finally:
        flush_logs()

if __name__ == "__main__":
    sys.exit(main())
