"""Module-root resolution from ``go.mod``."""
from __future__ import annotations

import logging
import re
from pathlib import Path

from goreviser.core.errors import ModuleResolutionError

logger = logging.getLogger(__name__)

GO_MOD = "go.mod"

# module example.com/proj | module "example.com/proj" | module `example.com/proj`
MODULE_DIRECTIVE = re.compile(
    r'^\s*module\s+(?:"(?P<quoted>[^"]+)"|`(?P<raw>[^`]+)`|(?P<bare>[^\s/]\S*))\s*(?://.*)?$',
    re.MULTILINE,
)


def find_go_mod(start: Path) -> Path | None:
    """Walk up from ``start`` to the nearest ``go.mod``."""
    start = start.resolve()
    directory = start if start.is_dir() else start.parent
    for candidate in (directory, *directory.parents):
        go_mod = candidate / GO_MOD
        if go_mod.is_file():
            return go_mod
    return None


def parse_module_name(text: str) -> str | None:
    """Module path declared by the ``module`` directive, if any.

    Examples
    --------
    >>> parse_module_name("module example.com/proj\\n\\ngo 1.22\\n")
    'example.com/proj'
    """
    match = MODULE_DIRECTIVE.search(text)
    if match is None:
        return None
    return match.group("quoted") or match.group("raw") or match.group("bare")


def resolve_module_name(path: Path) -> str:
    """Module name of the project containing ``path``.

    Raises
    ------
    ModuleResolutionError
        If there is no readable ``go.mod`` with a module directive.
    """
    go_mod = find_go_mod(path)
    if go_mod is None:
        raise ModuleResolutionError(path, f"no {GO_MOD} found in any parent directory")

    try:
        text = go_mod.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ModuleResolutionError(go_mod, f"cannot read {GO_MOD}: {e}", e) from e

    name = parse_module_name(text)
    if not name:
        raise ModuleResolutionError(go_mod, "module directive not found")

    logger.debug("Resolved module %s from %s", name, go_mod)
    return name
