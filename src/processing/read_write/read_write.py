"""Reading journey payloads and writing validation outcomes."""

import json
import logging
import sys
from pathlib import Path
from typing import Any, TextIO

from pydantic import ValidationError

from journey_canon.core.exceptions import JourneyInputError
from journey_canon.models.journey import JourneyInput
from journey_canon.models.outcome import ValidationFailure, ValidationSuccess

logger = logging.getLogger(__name__)


def load_journey_input(source: str | Path | TextIO | None = None) -> JourneyInput:
    """Load and decode a journey payload.

    Args:
        source: Path to a JSON file, an open text stream, or None for stdin

    Returns:
        The decoded journey payload

    Raises:
        JourneyInputError: If the payload cannot be read, is not JSON, or
            does not match the journey schema
    """
    if source is None:
        source = sys.stdin

    if isinstance(source, (str, Path)):
        path = Path(source)
        name = str(path)
        if not path.exists():
            # Report where the path breaks to help with typos
            trace_path = path
            broke_at = path.name
            while not trace_path.exists() and trace_path != trace_path.parent:
                broke_at = trace_path.name
                trace_path = trace_path.parent
            msg = f"Journey file does not exist. Possibly broken at: {broke_at} in {trace_path}?"
            raise JourneyInputError(msg, source=name)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as err:
            msg = f"Error while reading journey file: {err}"
            raise JourneyInputError(msg, source=name) from err
    else:
        name = getattr(source, "name", "<stream>")
        try:
            text = source.read()
        except OSError as err:
            msg = f"Error while reading journey stream: {err}"
            raise JourneyInputError(msg, source=name) from err

    logger.info("Loading journey from %s", name)
    return parse_journey_input(text, source=name)


def parse_journey_input(text: str | bytes, source: str | None = None) -> JourneyInput:
    """Decode a JSON journey payload.

    Raises:
        JourneyInputError: If the text is not JSON or does not match the schema
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as err:
        msg = f"Invalid JSON: {err}"
        raise JourneyInputError(msg, source=source) from err
    return journey_input_from_mapping(data, source=source)


def journey_input_from_mapping(
    data: Any,  # noqa: ANN401
    source: str | None = None,
) -> JourneyInput:
    """Validate decoded JSON against the journey schema.

    Raises:
        JourneyInputError: If the data does not match the schema
    """
    if not isinstance(data, dict):
        msg = f"Journey payload must be a JSON object, got {type(data).__name__}"
        raise JourneyInputError(msg, source=source)
    try:
        return JourneyInput.model_validate(data)
    except ValidationError as err:
        msg = f"Invalid journey payload: {err.error_count()} error(s)\n{err}"
        raise JourneyInputError(msg, source=source) from err


def write_outcome(
    outcome: ValidationSuccess | ValidationFailure,
    stream: TextIO | None = None,
    indent: int | None = 2,
) -> None:
    """Write the outcome as camelCase JSON followed by a newline."""
    if stream is None:
        stream = sys.stdout
    json.dump(outcome.to_json_dict(), stream, indent=indent, ensure_ascii=False)
    stream.write("\n")
