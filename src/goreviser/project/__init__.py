"""Project-level helpers: module name resolution and file discovery."""
from __future__ import annotations

from goreviser.project.files import find_go_files, is_generated
from goreviser.project.module import find_go_mod, parse_module_name, resolve_module_name

__all__ = [
    "find_go_files",
    "is_generated",
    "find_go_mod",
    "parse_module_name",
    "resolve_module_name",
]
