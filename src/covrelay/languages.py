"""Languages reported to Codacy.

Each member owns the identifier Codacy expects in its coverage endpoints
and the source-file extensions that belong to it. Every run iterates the
whole enumeration in declaration order.
"""

from __future__ import annotations

from enum import Enum
from pathlib import PurePath


class Language(Enum):
    """Closed set of supported languages.

    The value is the Codacy language identifier.
    """

    JAVA = "Java"
    KOTLIN = "Kotlin"
    SCALA = "Scala"
    GROOVY = "Groovy"
    PYTHON = "Python"
    JAVASCRIPT = "JavaScript"
    TYPESCRIPT = "TypeScript"
    GO = "Go"
    RUBY = "Ruby"
    PHP = "PHP"
    CSHARP = "CSharp"

    @property
    def lang(self) -> str:
        return self.value

    @property
    def extensions(self) -> frozenset[str]:
        return _EXTENSIONS[self]

    def owns(self, path: str) -> bool:
        """True when the file at *path* is a source file of this language."""
        return PurePath(path.replace("\\", "/")).suffix.lower() in self.extensions


_EXTENSIONS: dict[Language, frozenset[str]] = {
    Language.JAVA: frozenset({".java"}),
    Language.KOTLIN: frozenset({".kt", ".kts"}),
    Language.SCALA: frozenset({".scala", ".sc"}),
    Language.GROOVY: frozenset({".groovy"}),
    Language.PYTHON: frozenset({".py"}),
    Language.JAVASCRIPT: frozenset({".js", ".jsx", ".mjs", ".cjs"}),
    Language.TYPESCRIPT: frozenset({".ts", ".tsx"}),
    Language.GO: frozenset({".go"}),
    Language.RUBY: frozenset({".rb"}),
    Language.PHP: frozenset({".php"}),
    Language.CSHARP: frozenset({".cs"}),
}
