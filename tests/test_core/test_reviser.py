"""
Tests for goreviser.core.reviser module.

This module tests the whole single-file pipeline:
- Grouping and sorting of the rebuilt import block
- Unused import removal and version aliases
- Merging of several import declarations
- Idempotence, determinism and no-op stability
- Error reporting through ErrorResult
"""
from __future__ import annotations

import itertools
import textwrap
from pathlib import Path

import pytest

from goreviser import (
    ErrorResult,
    OptionSet,
    ParseError,
    ProjectContext,
    Reviser,
    ReviseResult,
    ReviserIOError,
    execute,
)
from goreviser.core.errors import EmitError

from ..conftest import requires_gofmt

ALL_OPTION_SETS = [
    OptionSet(remove_unused_imports=rm, use_alias_for_version_suffix=alias)
    for rm, alias in itertools.product([False, True], repeat=2)
]


def revise(reviser: Reviser, content: str) -> str:
    return reviser.revise(Path("main.go"), content.encode("utf-8")).decode("utf-8")


# =============================================================================
# Grouping Tests
# =============================================================================

class TestGrouping:
    """The rebuilt import block."""

    def test_groups_and_sorts(self, reviser_default: Reviser, sample_messy_code: str):
        output = revise(reviser_default, sample_messy_code)

        assert output == textwrap.dedent('''\
            package main

            import (
            \t"fmt"
            \t"strings"

            \t"github.com/pkg/errors"
            \tyaml "gopkg.in/yaml.v3"

            \t"example.com/proj/internal/store"
            )

            func main() {
            \tfmt.Println(strings.ToUpper("x"))
            \t_ = errors.New("boom")
            \t_ = store.Open()
            \t_, _ = yaml.Marshal(nil)
            }
        ''')

    def test_rest_of_file_is_untouched(self, reviser_default: Reviser):
        content = textwrap.dedent('''\
            // Package main does things.
            package main

            import (
            \t"os"
            \t"fmt"
            )

            func   main()   {
               fmt.Println(os.Args)   // odd spacing stays
            }
        ''')

        output = revise(reviser_default, content)

        assert output.startswith("// Package main does things.\npackage main\n\nimport (\n")
        assert output.endswith(
            ")\n\nfunc   main()   {\n   fmt.Println(os.Args)   // odd spacing stays\n}\n"
        )

    def test_single_declaration_form(self, reviser_default: Reviser):
        content = 'package main\n\nimport "fmt"\n\nfunc main() { fmt.Println() }\n'
        assert revise(reviser_default, content) == content

    def test_grouped_form_is_kept_for_one_import(self, reviser_default: Reviser):
        content = 'package main\n\nimport ("fmt")\n\nfunc main() { fmt.Println() }\n'
        output = revise(reviser_default, content)
        assert output == 'package main\n\nimport (\n\t"fmt"\n)\n\nfunc main() { fmt.Println() }\n'

    def test_merges_declarations(self, reviser_default: Reviser):
        content = textwrap.dedent('''\
            package main

            import "os"
            import "fmt"

            import (
            \t"github.com/x/y"
            )

            func main() {}
        ''')

        output = revise(reviser_default, content)

        assert output == textwrap.dedent('''\
            package main

            import (
            \t"fmt"
            \t"os"

            \t"github.com/x/y"
            )

            func main() {}
        ''')

    def test_trailing_comment_moves_with_merged_import(self, reviser_default: Reviser):
        content = textwrap.dedent('''\
            package main

            import "fmt"
            import "os" // exit

            func main() { fmt.Println(os.Args) }
        ''')

        output = revise(reviser_default, content)

        assert output == textwrap.dedent('''\
            package main

            import (
            \t"fmt"
            \t"os" // exit
            )

            func main() { fmt.Println(os.Args) }
        ''')

    def test_duplicates_are_removed(self, reviser_default: Reviser):
        content = 'package main\n\nimport (\n\t"fmt"\n\t"fmt"\n)\n'
        assert revise(reviser_default, content) == 'package main\n\nimport (\n\t"fmt"\n)\n'

    def test_comments_are_kept(self, reviser_default: Reviser):
        content = textwrap.dedent('''\
            package main

            import (
            \t"os" // files
            \t// formatting
            \t"fmt"
            )
        ''')

        assert revise(reviser_default, content) == textwrap.dedent('''\
            package main

            import (
            \t// formatting
            \t"fmt"
            \t"os" // files
            )
        ''')

    def test_cgo_import_is_left_alone(self, reviser_default: Reviser):
        content = textwrap.dedent('''\
            package main

            // #include <stdlib.h>
            import "C"

            import (
            \t"os"
            \t"fmt"
            )
        ''')

        output = revise(reviser_default, content)

        assert '// #include <stdlib.h>\nimport "C"\n' in output
        assert 'import (\n\t"fmt"\n\t"os"\n)' in output

    def test_file_without_imports_is_unchanged(self, reviser_all: Reviser):
        content = "package main\n\nfunc main() {}\n"
        assert revise(reviser_all, content) == content

    def test_local_prefixes(self):
        reviser = Reviser(ProjectContext("example.com/proj", ("github.com/acme/",)))
        content = 'package main\n\nimport (\n\t"github.com/acme/lib"\n\t"github.com/x/y"\n)\n'

        output = revise(reviser, content)

        assert 'import (\n\t"github.com/x/y"\n\n\t"github.com/acme/lib"\n)' in output


# =============================================================================
# Unused Import Tests
# =============================================================================

class TestRemoveUnused:
    """Tests for OptionSet.remove_unused_imports."""

    def test_removes_unused(self, project: ProjectContext, sample_unused_code: str):
        reviser = Reviser(project, OptionSet(remove_unused_imports=True))

        output = revise(reviser, sample_unused_code)

        assert '"fmt"' in output
        assert "example.com/proj/unused" not in output
        assert output.startswith('package main\n\nimport (\n\t"fmt"\n)\n\nfunc main()')

    def test_disabled_by_default(self, reviser_default: Reviser, sample_unused_code: str):
        assert "example.com/proj/unused" in revise(reviser_default, sample_unused_code)

    def test_keeps_blank_imports(self, project: ProjectContext):
        reviser = Reviser(project, OptionSet(remove_unused_imports=True))
        content = 'package main\n\nimport (\n\t_ "embed"\n\t"os"\n)\n'

        assert revise(reviser, content) == 'package main\n\nimport (\n\t_ "embed"\n)\n'

    def test_removes_every_import(self, project: ProjectContext):
        reviser = Reviser(project, OptionSet(remove_unused_imports=True))
        content = textwrap.dedent('''\
            package main

            import (
            \t"fmt"
            \t"os"
            )

            func main() {}
        ''')

        assert revise(reviser, content) == "package main\n\nfunc main() {}\n"

    def test_removes_every_import_from_several_declarations(self, project: ProjectContext):
        reviser = Reviser(project, OptionSet(remove_unused_imports=True))
        content = 'package main\n\nimport "fmt"\nimport "os"\n\nvar x = 1\n'

        assert revise(reviser, content) == "package main\n\nvar x = 1\n"

    def test_versioned_import_used_by_package_name(self, project: ProjectContext):
        reviser = Reviser(project, OptionSet(remove_unused_imports=True))
        content = textwrap.dedent('''\
            package main

            import "gopkg.in/yaml.v3"

            var _ = yaml.Marshal
        ''')

        assert revise(reviser, content) == content


# =============================================================================
# Alias Tests
# =============================================================================

class TestSetAlias:
    """Tests for OptionSet.use_alias_for_version_suffix."""

    def test_aliases_gopkg_in(self, project: ProjectContext):
        reviser = Reviser(project, OptionSet(use_alias_for_version_suffix=True))
        content = 'package main\n\nimport "gopkg.in/yaml.v3"\n\nvar _ = yaml.Marshal\n'

        output = revise(reviser, content)

        assert 'import yaml "gopkg.in/yaml.v3"' in output

    def test_aliases_major_version_segment(self, project: ProjectContext):
        reviser = Reviser(project, OptionSet(use_alias_for_version_suffix=True))
        content = 'package main\n\nimport (\n\t"github.com/go-pg/pg/v10"\n\t"fmt"\n)\n'

        output = revise(reviser, content)

        assert output == 'package main\n\nimport (\n\t"fmt"\n\n\tpg "github.com/go-pg/pg/v10"\n)\n'

    def test_existing_alias_is_kept(self, project: ProjectContext):
        reviser = Reviser(project, OptionSet(use_alias_for_version_suffix=True))
        content = 'package main\n\nimport y "gopkg.in/yaml.v3"\n'
        assert revise(reviser, content) == content


# =============================================================================
# Property Tests
# =============================================================================

class TestProperties:
    """Idempotence, determinism and no-op stability."""

    @pytest.mark.parametrize("options", ALL_OPTION_SETS)
    def test_idempotent(self, project: ProjectContext, sample_messy_code: str, options: OptionSet):
        reviser = Reviser(project, options)
        first = reviser.execute("main.go", sample_messy_code.encode())
        second = reviser.execute("main.go", first.output)

        assert first.changed
        assert second.changed is False

    def test_deterministic(self, reviser_all: Reviser, sample_messy_code: str):
        outputs = {reviser_all.revise(Path("main.go"), sample_messy_code.encode()) for _ in range(3)}
        assert len(outputs) == 1

    @pytest.mark.parametrize("options", ALL_OPTION_SETS)
    def test_organized_file_is_stable(
        self, project: ProjectContext, sample_organized_code: str, options: OptionSet
    ):
        result = Reviser(project, options).execute("main.go", sample_organized_code.encode())

        assert isinstance(result, ReviseResult)
        assert result.changed is False
        assert result.output == sample_organized_code.encode()
        assert result.diff is None

    @pytest.mark.parametrize("options", ALL_OPTION_SETS)
    @pytest.mark.parametrize(
        "content",
        [
            pytest.param(
                'package main\n\nimport (\n\t"fmt"\n)\n\nfunc main() { fmt.Println() }\n',
                id="grouped-single-spec",
            ),
            pytest.param(
                'package main\n\nimport "fmt" // print\n\nfunc main() { fmt.Println() }\n',
                id="single-line-with-comment",
            ),
            pytest.param(
                'package main\n\nimport (\n\t"fmt" // print\n\t"os"  // exit\n)\n\n'
                "func main() { fmt.Println(os.Args) }\n",
                id="aligned-comments",
            ),
            pytest.param(
                'package main\n\nimport (\n\t"bytes" // buffers\n\t"fmt"\n\t"os" // exit\n)\n\n'
                "func main() { fmt.Println(bytes.MinRead, os.Args) }\n",
                id="comment-runs-split",
            ),
            pytest.param(
                'package main\n\nimport (\n\t// Printing.\n\t"fmt"\n\t"os"\n)\n\n'
                "func main() { fmt.Println(os.Args) }\n",
                id="doc-on-first-spec",
            ),
            pytest.param(
                'package main\n\nimport (\n\t"fmt"\n\t// trailing note\n)\n\nfunc main() { fmt.Println() }\n',
                id="dangling-comment",
            ),
        ],
    )
    def test_gofmt_canonical_shapes_are_stable(
        self, project: ProjectContext, content: str, options: OptionSet
    ):
        result = Reviser(project, options).execute("main.go", content.encode())

        assert isinstance(result, ReviseResult)
        assert result.output == content.encode()
        assert result.changed is False


# =============================================================================
# execute() Tests
# =============================================================================

class TestExecute:
    """Tests for Reviser.execute() and the module-level execute()."""

    def test_reads_file(self, tmp_path: Path, project: ProjectContext, sample_messy_code: str):
        path = tmp_path / "main.go"
        path.write_text(sample_messy_code)

        result = execute(project, path)

        assert result.success
        assert result.changed
        assert result.files_changed == [path]
        assert result.diff.startswith(f"--- a/{path}")
        # execute() never writes.
        assert path.read_text() == sample_messy_code

    def test_parse_error(self, reviser_default: Reviser):
        result = reviser_default.execute("broken.go", b"package main\n\nimport (\n")

        assert isinstance(result, ErrorResult)
        assert not result.success
        assert result.operation == "parse"
        assert isinstance(result.exception, ParseError)
        assert result.target_repr == "broken.go"

    def test_missing_file(self, reviser_default: Reviser, tmp_path: Path):
        result = reviser_default.execute(tmp_path / "missing.go")

        assert isinstance(result, ErrorResult)
        assert isinstance(result.exception, ReviserIOError)

    def test_failing_formatter(self, project: ProjectContext, sample_messy_code: str):
        options = OptionSet(full_format=True, gofmt_command=("goreviser-no-such-gofmt",))
        result = Reviser(project, options).execute("main.go", sample_messy_code.encode())

        assert isinstance(result, ErrorResult)
        assert isinstance(result.exception, EmitError)
        assert result.operation == "emit"


@requires_gofmt
class TestFullFormat:
    """Tests for OptionSet.full_format (needs gofmt)."""

    def test_formats_whole_file(self, project: ProjectContext):
        content = 'package main\n\nimport (\n\t"os"\n\t"fmt"\n)\n\nfunc   main()  {\nfmt.Println(os.Args)\n}\n'
        reviser = Reviser(project, OptionSet(full_format=True))

        output = revise(reviser, content)

        assert output == (
            'package main\n\nimport (\n\t"fmt"\n\t"os"\n)\n\n'
            "func main() {\n\tfmt.Println(os.Args)\n}\n"
        )

    def test_formatted_file_is_stable(self, project: ProjectContext, sample_organized_code: str):
        reviser = Reviser(project, OptionSet(full_format=True, remove_unused_imports=True))
        result = reviser.execute("main.go", sample_organized_code.encode())
        assert result.changed is False
