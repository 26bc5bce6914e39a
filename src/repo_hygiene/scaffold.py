"""Write missing checklist files. Existing files are never overwritten."""

from __future__ import annotations

from datetime import date
from pathlib import Path

from .discovery import CANDIDATES, find_first
from .errors import RepoHygieneError
from .licenses import fetch_license
from .logging_config import get_logger

logger = get_logger(__name__)

PR_TEMPLATE_PATH = Path(".github") / "pull_request_template.md"

PR_TEMPLATE = """\
## Description

<!-- What does this change do, and why? Link the issue it addresses. -->

## Checklist

- [ ] The change is described above and linked to an issue where one exists
- [ ] Tests are added or updated, and the test suite passes
- [ ] `checkLint` passes
- [ ] `checkPretty` passes
- [ ] Documentation and README are updated where behaviour changed
- [ ] CHANGELOG is updated
- [ ] No secrets, credentials or generated files are committed
"""

EDITORCONFIG = """\
root = true

[*]
charset = utf-8
end_of_line = lf
indent_style = space
indent_size = 2
insert_final_newline = true
trim_trailing_whitespace = true

[*.md]
trim_trailing_whitespace = false
"""


def _write_new(path: Path, content: str) -> Path | None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("x", encoding="utf-8", newline="\n") as handle:
            handle.write(content)
    except FileExistsError:
        logger.info("Keeping existing %s", path)
        return None
    except OSError as exc:
        raise RepoHygieneError(f"Failed to write {path}: {exc}") from exc
    logger.info("Wrote %s", path)
    return path


def write_pr_template(root: Path) -> Path | None:
    """Write the pull request checklist unless a PR template already exists."""
    if find_first(root, CANDIDATES["pr_template"]) is not None:
        return None
    return _write_new(root / PR_TEMPLATE_PATH, PR_TEMPLATE)


def write_editorconfig(root: Path) -> Path | None:
    """Write a minimal .editorconfig unless one exists."""
    if find_first(root, CANDIDATES["editorconfig"]) is not None:
        return None
    return _write_new(root / ".editorconfig", EDITORCONFIG)


def write_license(
    root: Path,
    spdx_id: str,
    holder: str,
    year: int | None = None,
) -> Path | None:
    """Fetch the ``spdx_id`` license text and write it to ``LICENSE``.

    Nothing is fetched when a license file already exists.

    Raises:
        LicenseFetchError: If the license text cannot be retrieved.
    """
    if find_first(root, CANDIDATES["license"]) is not None:
        logger.info("A license file already exists in %s", root)
        return None
    if not holder.strip():
        raise RepoHygieneError("A copyright holder is required")

    license_text = fetch_license(spdx_id)
    content = license_text.render(holder=holder.strip(), year=year or date.today().year)
    return _write_new(root / "LICENSE", content)
