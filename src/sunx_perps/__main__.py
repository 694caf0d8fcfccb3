"""
SunX Perps command-line interface.

Runs one operation over one or more items and prints the execution records
as JSON.

Examples:
  # Account balance
  sunx-perps account getBalance

  # Limit order
  sunx-perps order placeOrder --field contractCode=BTC-USDT --field direction=buy \\
      --field offset=open --field volume=1 --field price=65000

  # Several items from a JSON file (array of field objects), keep going on errors
  sunx-perps order cancelOrder --items orders.json --continue-on-fail

  # Verify credentials
  sunx-perps --check-credentials
"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import msgspec

from sunx_perps.config import SunxConfig, load_config
from sunx_perps.exchanges.integrations.sunx import SunxOperationDispatcher, SunxRestClient
from sunx_perps.infrastructure.exceptions import (
    ConfigurationError, ExchangeRestError, InvalidInputError
)
from sunx_perps.infrastructure.logging import (
    LoggerFactory, configure_logging_from_dict, get_logger
)


class SunxPerpsCLI:
    """Command-line interface for SunX operations."""

    def __init__(self):
        self.logger = get_logger('sunx.cli')

    def parse_args(self, argv: Optional[List[str]] = None) -> argparse.Namespace:
        """Parse command line arguments."""
        parser = argparse.ArgumentParser(
            prog="sunx-perps",
            description="SunX perpetual futures API operations",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=__doc__.split("Examples:", 1)[1],
        )

        parser.add_argument("resource", nargs="?",
                            help="Resource: account, marketData, order, position")
        parser.add_argument("operation", nargs="?",
                            help="Operation name, e.g. getBalance, placeOrder")
        parser.add_argument("--field", "-f", action="append", default=[], metavar="KEY=VALUE",
                            help="Operation field for a single item (repeatable)")
        parser.add_argument("--items", type=Path,
                            help="JSON file with an array of field objects, one per item")
        parser.add_argument("--continue-on-fail", action="store_true", default=None,
                            help="Record per-item errors instead of aborting")
        parser.add_argument("--config", type=Path,
                            help="Path to config.yaml (default: project root, then CWD)")
        parser.add_argument("--env-file", type=Path,
                            help="Path to .env file")
        parser.add_argument("--check-credentials", action="store_true",
                            help="Verify credentials with a balance request and exit")

        args = parser.parse_args(argv)
        if not args.check_credentials and not (args.resource and args.operation):
            parser.error("resource and operation are required")
        return args

    @staticmethod
    def parse_fields(pairs: List[str]) -> Dict[str, Any]:
        fields: Dict[str, Any] = {}
        for pair in pairs:
            key, sep, value = pair.partition("=")
            if not sep or not key:
                raise InvalidInputError(f"Invalid field '{pair}', expected KEY=VALUE")
            fields[key.strip()] = value
        return fields

    def load_items(self, args: argparse.Namespace) -> List[Dict[str, Any]]:
        if args.items is None:
            return [self.parse_fields(args.field)]

        try:
            items = msgspec.json.decode(args.items.read_bytes())
        except (OSError, msgspec.DecodeError) as e:
            raise InvalidInputError(f"Cannot read items from {args.items}: {e}") from e
        if not isinstance(items, list) or not all(isinstance(item, dict) for item in items):
            raise InvalidInputError("Items file must contain a JSON array of objects")

        extra = self.parse_fields(args.field)
        return [{**item, **extra} for item in items]

    def setup_logging(self, config: SunxConfig) -> None:
        if not config.logging:
            return
        logging_data = dict(config.logging)
        if config.debug and logging_data.get('console'):
            logging_data['console'] = {**logging_data['console'], 'min_level': 'DEBUG'}
        try:
            configure_logging_from_dict(logging_data, config.environment)
        except (msgspec.ValidationError, ValueError) as e:
            raise ConfigurationError(f"Invalid logging configuration: {e}", 'logging') from e
        self.logger = get_logger('sunx.cli')

    async def run(self, args: argparse.Namespace) -> Any:
        config = load_config(args.config, args.env_file)
        self.setup_logging(config)

        continue_on_fail = (config.dispatcher.continue_on_fail
                            if args.continue_on_fail is None else args.continue_on_fail)

        async with SunxRestClient.from_config(config) as client:
            if args.check_credentials:
                await client.test_credentials()
                return {"credentials": "ok", "access_key": config.credentials.get_preview()}

            dispatcher = SunxOperationDispatcher(client,
                                                 continue_on_fail=continue_on_fail,
                                                 api_version=config.api_version)
            return await dispatcher.execute(args.resource, args.operation, self.load_items(args))

    async def main(self, argv: Optional[List[str]] = None) -> int:
        """Main entry point."""
        args = self.parse_args(argv)

        try:
            result = await self.run(args)
        except (ConfigurationError, InvalidInputError, ExchangeRestError) as e:
            self.logger.error(f"Operation failed: {e}", error_type=type(e).__name__)
            print(f"Error: {e}", file=sys.stderr)
            return 1
        finally:
            await LoggerFactory.flush_all()

        print(msgspec.json.format(msgspec.json.encode(result)).decode('utf-8'))
        return 0


def main():
    """Entry point for command line execution."""
    cli = SunxPerpsCLI()
    sys.exit(asyncio.run(cli.main()))


if __name__ == "__main__":
    main()
