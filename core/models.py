"""Core data models for ncu."""

from dataclasses import dataclass, field
from pathlib import Path

from .errors import ConfigConflictError

DEPENDENCY_GROUPS = ("dependencies", "devDependencies")


@dataclass
class DependencySpec:
    """A single dependency declaration in package.json."""

    name: str
    specifier: str
    group: str = "dependencies"  # dependencies, devDependencies


@dataclass
class Manifest:
    """A parsed package.json manifest."""

    path: Path
    data: dict

    def group(self, name: str) -> dict[str, str]:
        """Return the mapping for a dependency group."""
        return self.data.get(name) or {}

    def entries(self) -> list[DependencySpec]:
        """All declarations in file order, runtime dependencies first."""
        return [
            DependencySpec(name=name, specifier=specifier, group=group)
            for group in DEPENDENCY_GROUPS
            for name, specifier in self.group(group).items()
        ]


@dataclass
class UpdateDecision:
    """A dependency judged eligible for display or upgrade."""

    name: str
    current_version: str
    latest_version: str
    group: str = "dependencies"

    @property
    def is_equal(self) -> bool:
        return self.current_version == self.latest_version


@dataclass
class CheckOptions:
    """Mode flags for a single run."""

    upgrade: bool = False
    latest: bool = False
    show_all: bool = False

    def validate(self) -> None:
        """Reject flag combinations that cannot run together."""
        if self.show_all and self.upgrade:
            raise ConfigConflictError(
                "You cannot use both --show-all and --upgrade at the same time."
            )


@dataclass
class UpdateReport:
    """Outcome of a run."""

    decisions: list[UpdateDecision] = field(default_factory=list)
    written: bool = False

    @property
    def up_to_date(self) -> bool:
        return not self.decisions
