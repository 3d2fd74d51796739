"""
Configuration sourced from the invoking environment.

Values are resolved once at the CLI boundary and handed to the renderer
explicitly.
"""
import os
from pathlib import Path
from typing import Mapping, Optional, Sequence

UNKNOWN_REVISION = "unknown"
REVISION_ENV_KEYS = ("GITHUB_SHA",)
WORKDIR_ENV_KEYS = ("RUNNER_TEMP", "GITHUB_WORKSPACE", "PWD")
REGION_ENV_KEYS = ("AWS_REGION", "AWS_DEFAULT_REGION")


def _first_env(keys: Sequence[str], environ: Mapping[str, str]) -> Optional[str]:
    for k in keys:
        if environ.get(k):
            return environ[k]
    return None


def resolve_revision(environ: Optional[Mapping[str, str]] = None) -> str:
    environ = os.environ if environ is None else environ
    return _first_env(REVISION_ENV_KEYS, environ) or UNKNOWN_REVISION


def resolve_output_dir(environ: Optional[Mapping[str, str]] = None) -> Path:
    environ = os.environ if environ is None else environ
    return Path(_first_env(WORKDIR_ENV_KEYS, environ) or ".")


def resolve_region(environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    environ = os.environ if environ is None else environ
    return _first_env(REGION_ENV_KEYS, environ)


def input_default(name: str, environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """
    Reads a host-provided input, e.g. `aws-region` from INPUT_AWS-REGION.
    Surrounding whitespace is stripped and empty values count as unset.
    """
    environ = os.environ if environ is None else environ
    value = environ.get(f"INPUT_{name.replace(' ', '_').upper()}", "").strip()
    return value or None
