from pathlib import Path

from taskdef_render.config import (
    UNKNOWN_REVISION,
    input_default,
    resolve_output_dir,
    resolve_region,
    resolve_revision,
)


def test_revision_defaults_to_unknown():
    assert resolve_revision({}) == UNKNOWN_REVISION == "unknown"
    assert resolve_revision({"GITHUB_SHA": ""}) == "unknown"
    assert resolve_revision({"GITHUB_SHA": "deadbeef"}) == "deadbeef"


def test_output_dir_fallback_order():
    env = {"PWD": "/pwd", "GITHUB_WORKSPACE": "/ws", "RUNNER_TEMP": "/tmp/runner"}
    assert resolve_output_dir(env) == Path("/tmp/runner")
    env.pop("RUNNER_TEMP")
    assert resolve_output_dir(env) == Path("/ws")
    env.pop("GITHUB_WORKSPACE")
    assert resolve_output_dir(env) == Path("/pwd")
    assert resolve_output_dir({}) == Path(".")


def test_region_from_env():
    assert resolve_region({"AWS_DEFAULT_REGION": "eu-west-1"}) == "eu-west-1"
    assert resolve_region({"AWS_REGION": "us-west-2", "AWS_DEFAULT_REGION": "eu-west-1"}) == "us-west-2"
    assert resolve_region({}) is None


def test_input_default_reads_host_inputs():
    env = {"INPUT_AWS-CLUSTER-NAME": " c1 ", "INPUT_APP-ENV": ""}
    assert input_default("aws-cluster-name", env) == "c1"
    assert input_default("app-env", env) is None
    assert input_default("docker-image", env) is None
