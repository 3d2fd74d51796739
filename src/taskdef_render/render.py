"""
Renders the next task definition revision for an ECS service.

The renderer describes the service, loads the task definition it is running,
points the selected container at a new image, refreshes the build identity
environment variables, strips server-assigned fields and writes the result
to `task-definition-{revision}.json`.
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import boto3
from botocore.config import Config

from taskdef_render.errors import (
    MissingTaskDefinition,
    MissingTaskDefinitionReference,
    NoContainerFound,
    ServiceNotFound,
)
from taskdef_render.taskdef.containers import SELECTORS, Selector
from taskdef_render.taskdef.environment import build_label, merge_environment
from taskdef_render.taskdef.sanitize import sanitize_task_definition

USER_AGENT_EXTRA = "ecs-taskdef-render"


def _client_config() -> Config:
    return Config(user_agent_extra=USER_AGENT_EXTRA)


def region_ecs_client(region: str, profile: Optional[str] = None):
    """ECS client using the default credential chain. `profile` is ignored."""
    return boto3.client("ecs", region_name=region, config=_client_config())


def profile_ecs_client(region: str, profile: Optional[str] = None):
    """ECS client authenticated through a named local credential profile."""
    session = boto3.session.Session(profile_name=profile, region_name=region)
    return session.client("ecs", config=_client_config())


@dataclass(frozen=True)
class RenderVariant:
    """
    A deployment configuration of the renderer: how the target container is
    picked, how the ECS client is authenticated and whether container names
    are reported alongside the file path.
    """
    name: str
    selector: str
    client_factory: Callable[[str, Optional[str]], Any]
    report_container_names: bool

    @property
    def select(self) -> Selector:
        return SELECTORS[self.selector]


MULTI_CONTAINER = RenderVariant(
    "multi-container", "first-named", region_ecs_client, report_container_names=True
)
SINGLE_CONTAINER = RenderVariant(
    "single-container", "sole-container", profile_ecs_client, report_container_names=False
)

VARIANTS = {v.name: v for v in (MULTI_CONTAINER, SINGLE_CONTAINER)}


@dataclass
class RenderRequest:
    cluster: str
    service: str
    image: str
    app_env: str
    build_number: str
    revision: str
    output_dir: Path = field(default_factory=Path)


@dataclass
class RenderResult:
    path: Path
    task_definition: Dict[str, Any]
    container_name: Optional[str]
    container_names: List[str]
    report_container_names: bool = True

    def outputs(self) -> Dict[str, str]:
        outputs = {"task-definition": str(self.path)}
        if self.report_container_names:
            outputs["container-definition-name"] = ",".join(self.container_names)
            outputs["first-container-definition-name"] = self.container_name or ""
        return outputs


def _dump(payload: Any) -> str:
    return json.dumps(payload, default=str)


def _default_file_mode() -> int:
    # mkstemp creates 0600; match what a plain open() would produce
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_task_definition(task_definition: dict, output_dir: Path, revision: str) -> Path:
    """
    Writes the task definition as indented JSON. The file is staged next to
    its destination and moved into place, so a failed write leaves nothing.
    """
    output_dir = Path(output_dir)
    path = output_dir / f"task-definition-{revision}.json"
    contents = json.dumps(task_definition, indent=2, default=str)
    fd, tmp_name = tempfile.mkstemp(dir=output_dir, prefix=".task-definition-", suffix=".tmp")
    try:
        os.fchmod(fd, _default_file_mode())
        with os.fdopen(fd, "w") as f:
            f.write(contents)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
    return path


class TaskDefinitionRenderer:
    """
    Produces a resubmittable task definition for one service deployment.
    """
    def __init__(self, ecs_client, variant: RenderVariant = MULTI_CONTAINER):
        self.ecs = ecs_client
        self.variant = variant
        self.logger = logging.getLogger(self.__class__.__name__)

    def fetch_service(self, cluster: str, service: str) -> dict:
        resp = self.ecs.describe_services(cluster=cluster, services=[service])
        services = resp.get("services") or []
        if not services:
            self.logger.warning(_dump(resp))
            raise ServiceNotFound(f"no services named {service} in cluster {cluster}", resp)
        return services[0]

    def fetch_task_definition(self, service: dict) -> dict:
        arn = service.get("taskDefinition")
        if not arn:
            self.logger.warning(_dump(service))
            raise MissingTaskDefinitionReference(
                f"service {service.get('serviceName')} has no task definition", service
            )
        resp = self.ecs.describe_task_definition(taskDefinition=arn)
        self.logger.debug(f"Service {service.get('serviceName')} is currently running: ARN: {arn}")
        task_definition = resp.get("taskDefinition")
        if not task_definition:
            self.logger.warning(_dump(resp))
            raise MissingTaskDefinition(f"no task definition returned for {arn}", resp)
        return task_definition

    def render(self, request: RenderRequest) -> RenderResult:
        service = self.fetch_service(request.cluster, request.service)
        task_definition = self.fetch_task_definition(service)

        try:
            selection = self.variant.select(task_definition.get("containerDefinitions"))
        except NoContainerFound as e:
            self.logger.warning(_dump(task_definition))
            e.response = task_definition
            raise
        container = selection.container
        self.logger.debug(f"Container Definitions names: {', '.join(selection.container_names)}")
        self.logger.debug(
            f"Task Definition {task_definition.get('taskDefinitionArn')} is currently running {container.get('image')}"
        )

        container["image"] = request.image
        container["environment"] = merge_environment(
            container.get("environment"),
            request.revision,
            build_label(request.app_env, request.build_number),
        )
        sanitize_task_definition(task_definition)

        path = write_task_definition(task_definition, request.output_dir, request.revision)
        self.logger.info(f"Task definition for {request.service} written to {path}")
        return RenderResult(
            path=path,
            task_definition=task_definition,
            container_name=container.get("name"),
            container_names=selection.container_names,
            report_container_names=self.variant.report_container_names,
        )
