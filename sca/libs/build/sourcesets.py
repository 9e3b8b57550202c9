"""
Named, dynamically growing collections of the host build, and the two source set layouts.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Generic, TypeVar

E = TypeVar('E')


class NamedDomainObjectContainer(Generic[E]):
    """
    Elements may be added at any point of the configuration phase, so consumers should
    register with all() instead of iterating a snapshot.
    """

    def __init__(self, factory: Callable[[str], E], namer: Callable[[E], str] = lambda e: e.name):
        self.factory = factory
        self.namer = namer
        self._items: dict[str, E] = {}
        self._listeners: list[Callable[[E], None]] = []

    def add(self, element: E) -> bool:
        name = self.namer(element)
        if name in self._items:
            return False

        self._items[name] = element
        for listener in list(self._listeners):
            listener(element)
        return True

    def create(self, name: str) -> E:
        if name in self._items:
            raise ValueError(f"Cannot add a '{name}' element as one with that name already exists.")
        element = self.factory(name)
        self.add(element)
        return element

    def maybe_create(self, name: str) -> E:
        element = self._items.get(name)
        if element is None:
            element = self.create(name)
        return element

    def find_by_name(self, name: str) -> E | None:
        return self._items.get(name)

    def when_object_added(self, action: Callable[[E], None]):
        self._listeners.append(action)

    def all(self, action: Callable[[E], None]):
        """Run action against every element, now and as they get added."""
        self.when_object_added(action)
        for element in list(self._items.values()):
            action(element)

    @property
    def names(self) -> list[str]:
        return list(self._items)

    def __getitem__(self, name: str) -> E:
        return self._items[name]

    def __contains__(self, name: str) -> bool:
        return name in self._items

    def __iter__(self) -> Iterator[E]:
        return iter(list(self._items.values()))

    def __len__(self) -> int:
        return len(self._items)


@dataclass
class Configuration:
    """A named bucket of dependency files."""

    name: str
    dependencies: list[Path] = field(default_factory=list)
    extends_from: list[Configuration] = field(default_factory=list)

    @property
    def files(self) -> list[Path]:
        files = []
        for parent in self.extends_from:
            files.extend(f for f in parent.files if f not in files)
        files.extend(f for f in self.dependencies if f not in files)
        return files


@dataclass
class SourceSet:
    """Conventional single language layout: src/<name>/java compiled to build/classes/java/<name>."""

    name: str
    java_src_dirs: list[Path] = field(default_factory=list)
    output_dirs: list[Path] = field(default_factory=list)
    compile_classpath: list[Path] = field(default_factory=list)

    @classmethod
    def conventional(cls, project_dir: Path, build_dir: Path, name: str) -> SourceSet:
        return cls(
            name,
            java_src_dirs=[project_dir / 'src' / name / 'java'],
            output_dirs=[build_dir / 'classes' / 'java' / name],
        )


@dataclass
class AndroidSourceSet:
    """Android layout, one per variant, build type or flavor."""

    name: str
    java_src_dirs: list[Path] = field(default_factory=list)
    package_configuration_name: str = 'compile'

    @classmethod
    def conventional(cls, project_dir: Path, name: str) -> AndroidSourceSet:
        return cls(
            name,
            java_src_dirs=[project_dir / 'src' / name / 'java'],
            package_configuration_name='compile' if name == 'main' else f"{name}Compile",
        )
