"""
Reporting of named outputs to downstream steps.
"""
import logging
import os
import sys
from typing import Mapping, Optional, TextIO

logger = logging.getLogger(__name__)

OUTPUT_FILE_ENV = "GITHUB_OUTPUT"


def set_outputs(
    outputs: Mapping[str, str],
    environ: Optional[Mapping[str, str]] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """
    Appends `name=value` lines to the file named by GITHUB_OUTPUT, or
    prints them when that variable is not set.
    """
    environ = os.environ if environ is None else environ
    lines = [f"{k}={v}\n" for k, v in outputs.items()]
    output_file = environ.get(OUTPUT_FILE_ENV)
    if output_file:
        with open(output_file, "a") as f:
            f.writelines(lines)
        logger.debug(f"Wrote outputs {', '.join(outputs)} to {output_file}")
    else:
        (stream or sys.stdout).writelines(lines)


def report_failure(message: str, environ: Optional[Mapping[str, str]] = None) -> None:
    environ = os.environ if environ is None else environ
    if environ.get("GITHUB_ACTIONS") == "true":
        print(f"::error::{message}")
