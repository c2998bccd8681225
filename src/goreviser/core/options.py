"""Immutable configuration values passed into every revise call."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class OptionSet:
    """Independent switches for the optional revising stages.

    Attributes
    ----------
    remove_unused_imports : bool
        Drop imports whose local name is never used as a selector.
    use_alias_for_version_suffix : bool
        Give ``.../v2`` and ``pkg.v3`` style imports an explicit alias.
    full_format : bool
        Run the whole file through ``gofmt``, not only the import block.
    gofmt_command : tuple[str, ...]
        Command used as the canonical printer when ``full_format`` is set.
    """

    remove_unused_imports: bool = False
    use_alias_for_version_suffix: bool = False
    full_format: bool = False
    gofmt_command: tuple[str, ...] = ("gofmt",)


@dataclass(frozen=True)
class ProjectContext:
    """What the classifier needs to know about the surrounding project.

    Attributes
    ----------
    module_name : str
        Module path declared in ``go.mod`` (e.g. ``example.com/proj``).
    local_prefixes : tuple[str, ...]
        Extra import path prefixes that count as project-local.
    """

    module_name: str
    local_prefixes: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept any iterable (lists from the CLI) but store a tuple.
        object.__setattr__(self, "local_prefixes", tuple(self.local_prefixes))

    @classmethod
    def from_path(
        cls,
        file_path: Path | str,
        module_name: str | None = None,
        local_prefixes: tuple[str, ...] | list[str] = (),
    ) -> ProjectContext:
        """Build a context, reading ``go.mod`` when no module name is given.

        Raises
        ------
        ModuleResolutionError
            If ``module_name`` is empty and no ``go.mod`` declares one.
        """
        if not module_name:
            from goreviser.project.module import resolve_module_name

            module_name = resolve_module_name(Path(file_path))
        return cls(module_name=module_name, local_prefixes=tuple(local_prefixes))
