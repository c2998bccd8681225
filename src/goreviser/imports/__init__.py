"""Import management for Go files.

Provides:
- Extracting import specs and their comments
- Detecting and removing unused imports
- Classifying imports into standard, general and project groups
- Aliasing imports whose path ends in a version marker
"""
from __future__ import annotations

from goreviser.imports.aliases import assign_version_aliases, version_alias
from goreviser.imports.analyzer import ImportAnalyzer, ImportDecl, ImportEntry, OtherDecl
from goreviser.imports.organizer import ImportGroup, ImportOrganizer
from goreviser.imports.stdlib import DEFAULT_REGISTRY, STD_PACKAGES, StdlibRegistry

__all__ = [
    "ImportAnalyzer",
    "ImportDecl",
    "ImportEntry",
    "OtherDecl",
    "ImportGroup",
    "ImportOrganizer",
    "StdlibRegistry",
    "STD_PACKAGES",
    "DEFAULT_REGISTRY",
    "assign_version_aliases",
    "version_alias",
]
