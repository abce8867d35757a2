"""Main module entrypoint for local runtime execution.

This module validates startup configuration and either launches the FastAPI
service or normalizes one webhook payload file offline.
"""

import argparse
import json
import sys
from pathlib import Path

import uvicorn

from app.api.errors import api_build_webhook_error_response
from app.api.routers import api_json_safe
from app.bootstrap import bootstrap_create_application, bootstrap_create_orchestrator
from app.config import AppSettings, config_configure_logging, config_load_settings
from app.domain import WebhookError


def main(argv: list[str] | None = None) -> None:
    """Run selected runtime command with validated startup configuration.

    Args:
        argv: Optional argument list; process arguments when omitted.

    Returns:
        None: This function does not return a runtime value.

    Raises:
        SettingsLoadError: Raised when configuration validation fails.
        SystemExit: Raised with status 1 when offline mapping fails.
    """

    argument_parser = argparse.ArgumentParser(description="Chargeback webhook mapper runtime entrypoint")
    argument_parser.add_argument(
        "command",
        nargs="?",
        default="api",
        choices=("api", "map"),
        help="Runtime command: `api` starts server, `map` normalizes one payload file and prints the record",
        type=str,
    )
    argument_parser.add_argument(
        "--provider",
        dest="provider",
        type=str,
        default="stripe",
        help="Provider identifier for `map`",
    )
    argument_parser.add_argument(
        "--payload-file",
        dest="payload_file",
        type=Path,
        help="Path to a JSON webhook payload for `map`",
    )
    argument_parser.add_argument(
        "--timeline",
        dest="include_timeline",
        action="store_true",
        help="Include the pipeline stage timeline in `map` output",
    )
    parsed_arguments = argument_parser.parse_args(argv)

    settings = config_load_settings()

    if parsed_arguments.command == "map":
        if parsed_arguments.payload_file is None:
            argument_parser.error("--payload-file is required for `map`")
        config_configure_logging(settings)
        exit_code = main_map_payload_file(
            provider=parsed_arguments.provider,
            payload_file=parsed_arguments.payload_file,
            settings=settings,
            include_timeline=parsed_arguments.include_timeline,
        )
        if exit_code != 0:
            raise SystemExit(exit_code)
        return

    application = bootstrap_create_application(settings)
    uvicorn.run(
        application,
        host=settings.application_host,
        port=settings.application_port,
    )


def main_map_payload_file(
    provider: str,
    payload_file: Path,
    settings: AppSettings | None = None,
    include_timeline: bool = False,
) -> int:
    """Normalize one webhook payload file and print the outcome as JSON.

    Args:
        provider: Provider identifier.
        payload_file: Path to the JSON payload.
        settings: Optional pre-loaded settings.
        include_timeline: Add the stage timeline next to the result.

    Returns:
        int: 0 on success, 1 on taxonomy failure.

    Raises:
        OSError: Raised when the payload file cannot be read.
        json.JSONDecodeError: Raised when the file is not valid JSON.
    """

    payload = json.loads(payload_file.read_text(encoding="utf-8"))
    orchestrator = bootstrap_create_orchestrator(settings)
    try:
        processing_result = orchestrator.webhook_process(payload, provider)
    except WebhookError as error:
        error_response = api_build_webhook_error_response(error, orchestrator.webhook_supported_providers())
        sys.stderr.write(error_response.body.decode("utf-8") + "\n")
        return 1

    output: dict[str, object] = {"result": api_json_safe(processing_result.record)}
    if include_timeline:
        output["timeline"] = list(processing_result.timeline)
    print(json.dumps(output, indent=2))
    return 0


if __name__ == "__main__":
    main()
