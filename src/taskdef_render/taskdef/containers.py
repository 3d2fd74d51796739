"""
Selection of the container definition that receives the new image.
"""
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

from taskdef_render.errors import NoContainerFound


@dataclass
class ContainerSelection:
    container: dict
    container_names: List[str]


def container_names(container_definitions: Optional[Sequence[dict]]) -> List[str]:
    return [c["name"] for c in container_definitions or [] if c.get("name")]


def select_first_named(container_definitions: Optional[Sequence[dict]]) -> ContainerSelection:
    """
    Picks the first container definition that has a non-empty name.
    Unnamed entries earlier in the list are skipped.
    """
    names = container_names(container_definitions)
    named = [c for c in container_definitions or [] if c.get("name")]
    if not named:
        raise NoContainerFound("no container definition with a name")
    return ContainerSelection(container=named[0], container_names=names)


def select_sole_container(container_definitions: Optional[Sequence[dict]]) -> ContainerSelection:
    """
    Picks the first container definition as-is, named or not.
    """
    if not container_definitions:
        raise NoContainerFound("no container definitions")
    return ContainerSelection(
        container=container_definitions[0],
        container_names=container_names(container_definitions),
    )


Selector = Callable[[Optional[Sequence[dict]]], ContainerSelection]

SELECTORS: Dict[str, Selector] = {
    "first-named": select_first_named,
    "sole-container": select_sole_container,
}
