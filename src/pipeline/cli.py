"""Command line entry point: validate one journey file.

Prints the outcome JSON to stdout. Exit codes:

- 0: the journey is valid
- 1: the journey was rejected
- 2: the journey could not be evaluated (unreadable input or config,
  geofence that cannot be loaded)
"""

import argparse
import logging
import sys
import webbrowser
from pathlib import Path

import yaml
from pydantic import ValidationError

from journey_canon.core.exceptions import GeofenceLoadError, JourneyInputError
from pipeline.logger import setup_logging
from pipeline.pipeline import JourneyValidator
from pipeline.pipeline_configs import ValidationConfig
from processing.read_write import (
    geojson_io_url,
    load_journey_input,
    traces_to_geojson,
    write_outcome,
)

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_REJECTED = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="carpool-validate",
        description="Validate that a driver and a passenger GPS trace describe a shared trip.",
    )
    parser.add_argument(
        "-f",
        "--file-path",
        type=Path,
        default=None,
        help="Journey JSON file. Reads stdin when omitted.",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="YAML validation config. Reference thresholds when omitted.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write DEBUG logs to this file.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log DEBUG messages to the console.",
    )
    parser.add_argument(
        "--visualize",
        action="store_true",
        help="Open the traces and common route on geojson.io.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the command line and return the process exit code."""
    args = build_parser().parse_args(argv)

    try:
        config = ValidationConfig.from_yaml(args.config) if args.config else ValidationConfig()
    except (OSError, yaml.YAMLError, ValidationError, ValueError) as err:
        setup_logging(log_file=args.log_file)
        logger.error("Could not load config %s: %s", args.config, err)  # noqa: TRY400
        return EXIT_ERROR

    log_file = args.log_file or config.log_file
    setup_logging(
        log_file=log_file,
        console_level=logging.DEBUG if args.verbose else logging.WARNING,
    )

    try:
        validator = JourneyValidator(config=config)
        journey_input = load_journey_input(args.file_path)
        outcome = validator.validate(journey_input)
    except (JourneyInputError, GeofenceLoadError) as err:
        logger.error("Could not evaluate journey: %s", err)  # noqa: TRY400
        return EXIT_ERROR

    write_outcome(outcome, sys.stdout)

    if args.visualize and validator.debug_traces:
        url = geojson_io_url(traces_to_geojson(validator.debug_traces))
        print(url, file=sys.stderr)  # noqa: T201
        webbrowser.open(url)

    return EXIT_SUCCESS if outcome.success else EXIT_REJECTED


if __name__ == "__main__":
    sys.exit(main())
