"""
Shared pytest fixtures for the goreviser test suite.

This module provides:
- Sample Go sources (messy and already-organized import blocks)
- Temporary Go projects with a go.mod
- Pre-configured ProjectContext and Reviser instances

Fixture Naming Convention:
- tmp_* : Fixtures that create temporary directories/files
- sample_* : Fixtures that provide sample content strings
- reviser_* : Fixtures that provide configured Reviser instances
"""
from __future__ import annotations

import shutil
import textwrap
from pathlib import Path

import pytest

from goreviser import OptionSet, ProjectContext, Reviser

MODULE_NAME = "example.com/proj"


def write_go(directory: Path, name: str, content: str) -> Path:
    """Write a Go file (creating parent directories) and return its path."""
    path = directory / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


requires_gofmt = pytest.mark.skipif(shutil.which("gofmt") is None, reason="gofmt not installed")


# =============================================================================
# Sample Go Code Fixtures
# =============================================================================

@pytest.fixture
def sample_messy_code() -> str:
    """
    Go file with an unordered, ungrouped import block.

    Contains:
    - Standard, general and project imports interleaved
    - An aliased import
    - A version-suffixed import used through its package name
    """
    return textwrap.dedent('''\
        package main

        import (
        \t"example.com/proj/internal/store"
        \t"github.com/pkg/errors"
        \t"strings"
        \tyaml "gopkg.in/yaml.v3"
        \t"fmt"
        )

        func main() {
        \tfmt.Println(strings.ToUpper("x"))
        \t_ = errors.New("boom")
        \t_ = store.Open()
        \t_, _ = yaml.Marshal(nil)
        }
    ''')


@pytest.fixture
def sample_organized_code() -> str:
    """Go file whose imports are already grouped, sorted and all used."""
    return textwrap.dedent('''\
        package main

        import (
        \t"fmt"
        \t"strings"

        \t"github.com/pkg/errors"

        \t"example.com/proj/internal/store"
        )

        func main() {
        \tfmt.Println(strings.ToUpper("x"))
        \t_ = errors.New("boom")
        \t_ = store.Open()
        }
    ''')


@pytest.fixture
def sample_unused_code() -> str:
    """Go file importing two packages of which only fmt is used."""
    return textwrap.dedent('''\
        package main

        import (
        \t"example.com/proj/unused"
        \t"fmt"
        )

        func main() {
        \tfmt.Println("hello")
        }
    ''')


# =============================================================================
# Project Fixtures
# =============================================================================

@pytest.fixture
def project() -> ProjectContext:
    """ProjectContext for the example module."""
    return ProjectContext(module_name=MODULE_NAME)


@pytest.fixture
def tmp_go_project(tmp_path: Path) -> Path:
    """
    Temporary Go module.

    Structure:
        tmp_path/
        ├── go.mod          (module example.com/proj)
        └── cmd/app/        (empty, for sources)
    """
    (tmp_path / "go.mod").write_text(f"module {MODULE_NAME}\n\ngo 1.22\n")
    (tmp_path / "cmd" / "app").mkdir(parents=True)
    return tmp_path


@pytest.fixture
def reviser_default(project: ProjectContext) -> Reviser:
    """Reviser with every optional stage off."""
    return Reviser(project, OptionSet())


@pytest.fixture
def reviser_all(project: ProjectContext) -> Reviser:
    """Reviser that prunes unused imports and aliases versioned paths."""
    return Reviser(
        project,
        OptionSet(remove_unused_imports=True, use_alias_for_version_suffix=True),
    )
