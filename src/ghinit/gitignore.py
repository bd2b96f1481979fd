"""``.gitignore`` synthesis from simple filesystem heuristics.

Generated patterns live between two marker lines. Writing again replaces the
marked block in place, so repeated runs do not stack copies; anything outside
the markers is left untouched.

Example:
    >>> merge_ignore_content("foo\\n", "# >>> ghinit >>>\\n*.log\\n# <<< ghinit <<<\\n")
    'foo\\n# >>> ghinit >>>\\n*.log\\n# <<< ghinit <<<\\n'
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

IGNORE_FILENAME = ".gitignore"
BLOCK_START = "# >>> ghinit >>>"
BLOCK_END = "# <<< ghinit <<<"
ENCODING_ERRORS = "surrogateescape"

GENERIC_PATTERNS = (
    ".DS_Store",
    "Thumbs.db",
    "*.log",
    ".env",
    ".vscode/",
    ".idea/",
    "*.swp",
    "*.tmp",
)


@dataclass(frozen=True)
class IgnoreRule:
    """One ecosystem block, enabled when a marker file is present."""

    label: str
    markers: tuple[str, ...]
    patterns: tuple[str, ...]

    def matches(self, root: Path) -> bool:
        for marker in self.markers:
            if any(root.glob(marker)):
                return True
        return False


IGNORE_RULES = (
    IgnoreRule(
        label="Node.js",
        markers=("package.json",),
        patterns=("node_modules/", "npm-debug.log*", "dist/", "build/", ".npm"),
    ),
    IgnoreRule(
        label="Python",
        markers=("requirements.txt", "pyproject.toml", "setup.py", "Pipfile", "*.py"),
        patterns=(
            "__pycache__/",
            "*.py[cod]",
            ".venv/",
            "venv/",
            "*.egg-info/",
            ".pytest_cache/",
        ),
    ),
    IgnoreRule(
        label=".NET",
        markers=("*.csproj", "*.sln"),
        patterns=("bin/", "obj/", "*.user"),
    ),
    IgnoreRule(
        label="Java",
        markers=("pom.xml", "build.gradle"),
        patterns=("target/", "*.class", ".gradle/"),
    ),
    IgnoreRule(
        label="Go",
        markers=("go.mod",),
        patterns=("vendor/", "*.exe", "*.test"),
    ),
    IgnoreRule(
        label="Rust",
        markers=("Cargo.toml",),
        patterns=("target/",),
    ),
)


def detect_rules(root: Path) -> list[IgnoreRule]:
    """Return the ecosystem rules whose marker files exist at ``root``."""
    return [rule for rule in IGNORE_RULES if rule.matches(root)]


def synthesize_block(root: Path) -> str:
    """Build the marked ignore block for ``root``."""
    lines = [BLOCK_START, "# General", *GENERIC_PATTERNS]
    for rule in detect_rules(root):
        lines.append("")
        lines.append(f"# {rule.label}")
        lines.extend(rule.patterns)
    lines.append(BLOCK_END)
    return "\n".join(lines) + "\n"


def merge_ignore_content(existing: str, block: str) -> str:
    """Merge a generated block into existing ignore-file text.

    Example:
        >>> merge_ignore_content("", "x\\n")
        'x\\n'
    """
    start = existing.find(BLOCK_START)
    if start != -1:
        end = existing.find(BLOCK_END, start)
        if end != -1:
            tail_start = end + len(BLOCK_END)
            if existing.startswith("\n", tail_start):
                tail_start += 1
            return existing[:start] + block + existing[tail_start:]
    if existing and not existing.endswith("\n"):
        existing += "\n"
    return existing + block


def write_ignore_file(root: Path) -> Path:
    """Write the merged ``.gitignore`` at ``root`` and return its path.

    Bytes outside UTF-8 in an existing file are written back unchanged.

    Raises:
        OSError: When the file cannot be read or written.
    """
    path = root / IGNORE_FILENAME
    existing = path.read_text(encoding="utf-8", errors=ENCODING_ERRORS) if path.exists() else ""
    merged = merge_ignore_content(existing, synthesize_block(root))
    path.write_text(merged, encoding="utf-8", errors=ENCODING_ERRORS)
    return path
