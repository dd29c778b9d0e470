"""Main module entrypoint for local runtime execution.

This module validates startup configuration and either launches the FastAPI
service or computes holdings once and prints them.
"""

import argparse
import json
import logging

import uvicorn

from holdings_ledger.api.routers.holdings import api_serialize_holding
from holdings_ledger.bootstrap import bootstrap_create_application, bootstrap_create_holdings_service
from holdings_ledger.config import config_load_settings

logger = logging.getLogger(__name__)


def main() -> None:
    """Run selected runtime command with validated startup configuration.

    Returns:
        None: This function does not return a runtime value.

    Raises:
        SettingsLoadError: Raised when configuration validation fails.
        SystemExit: Raised with code 1 when the `holdings` command fails.
    """

    argument_parser = argparse.ArgumentParser(description="Holdings Ledger runtime entrypoint")
    argument_parser.add_argument(
        "command",
        nargs="?",
        default="api",
        choices=("api", "holdings"),
        help="Runtime command: `api` starts server, `holdings` computes current holdings once and prints JSON",
        type=str,
    )
    parsed_arguments = argument_parser.parse_args()

    settings = config_load_settings()

    if parsed_arguments.command == "holdings":
        holdings_service = bootstrap_create_holdings_service(settings=settings)
        try:
            calculation_result = holdings_service.ledger_holdings_calculate()
        except (ValueError, RuntimeError) as error:
            logger.error("holdings calculation failed: %s", error)
            raise SystemExit(1) from error
        payload = {
            "success": True,
            "holdings": [api_serialize_holding(holding) for holding in calculation_result.holdings],
            "count": len(calculation_result.holdings),
        }
        print(json.dumps(payload, indent=2))
        return

    application = bootstrap_create_application(settings=settings)
    uvicorn.run(
        application,
        host=settings.application_host,
        port=settings.application_port,
    )


if __name__ == "__main__":
    main()
