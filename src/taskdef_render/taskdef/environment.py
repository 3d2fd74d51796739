"""
Environment variable merging for the build identity variables.
"""
from typing import List, Optional, Sequence

GIT_REVISION = "GIT_REVISION"
DOCKER_BUILD = "DOCKER_BUILD"
MANAGED_ENV_NAMES = (DOCKER_BUILD, GIT_REVISION)


def build_label(app_env: str, build_number: str) -> str:
    return f"{app_env}-{build_number}"


def merge_environment(
    environment: Optional[Sequence[dict]], revision: str, label: str
) -> List[dict]:
    """
    Returns a new environment list with any existing GIT_REVISION and
    DOCKER_BUILD entries dropped and fresh ones appended, in that order.
    Other entries keep their values and relative order.
    """
    merged = [env for env in environment or [] if env.get("name") not in MANAGED_ENV_NAMES]
    merged.append({"name": GIT_REVISION, "value": revision})
    merged.append({"name": DOCKER_BUILD, "value": label})
    return merged
