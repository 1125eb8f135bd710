# -*- coding: utf-8 -*-
"""View-tree surface used by the section loader.

The loader never touches widgets directly. It talks to a ViewTree:

- find_containers(section_id) -> live containers for that id (normally 0 or 1)
- all_containers()            -> every live section container
- create_container(section_id)
- remove_container(container)
- set_content(container, body)
- set_visible(container, visible)

MemoryViewTree is the headless implementation (tests, --headless runs).
The PyQt5 implementation lives in ui/qt_view_tree.py.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional, Protocol, Tuple


class ViewTree(Protocol):
    def find_containers(self, section_id: str) -> List[Any]:
        ...

    def all_containers(self) -> List[Any]:
        ...

    def create_container(self, section_id: str) -> Any:
        ...

    def remove_container(self, container: Any) -> None:
        ...

    def set_content(self, container: Any, body: str) -> None:
        ...

    def set_visible(self, container: Any, visible: bool) -> None:
        ...


class NavIndicator(Protocol):
    def set_active(self, section_id: Optional[str]) -> None:
        ...


@dataclass(eq=False)
class MemoryContainer:
    section_id: str
    body: str = ""
    visible: bool = False
    revision: int = 0


@dataclass
class MemoryViewTree:
    """In-memory view tree. Records every mutation in ``mutations``."""

    containers: List[MemoryContainer] = field(default_factory=list)
    mutations: List[Tuple[str, str]] = field(default_factory=list)

    def find_containers(self, section_id: str) -> List[MemoryContainer]:
        return [c for c in self.containers if c.section_id == section_id]

    def all_containers(self) -> List[MemoryContainer]:
        return list(self.containers)

    def create_container(self, section_id: str) -> MemoryContainer:
        container = MemoryContainer(section_id=str(section_id))
        self.containers.append(container)
        self.mutations.append(("create", container.section_id))
        return container

    def remove_container(self, container: MemoryContainer) -> None:
        self.containers = [c for c in self.containers if c is not container]
        self.mutations.append(("remove", container.section_id))

    def set_content(self, container: MemoryContainer, body: str) -> None:
        container.body = str(body)
        container.revision += 1
        self.mutations.append(("content", container.section_id))

    def set_visible(self, container: MemoryContainer, visible: bool) -> None:
        container.visible = bool(visible)
        self.mutations.append(("visible" if visible else "hidden", container.section_id))

    def visible_ids(self) -> List[str]:
        return [c.section_id for c in self.containers if c.visible]


class MemoryNavIndicator:
    def __init__(self) -> None:
        self.active: Optional[str] = None
        self.history: List[Optional[str]] = []

    def set_active(self, section_id: Optional[str]) -> None:
        self.active = section_id
        self.history.append(section_id)
