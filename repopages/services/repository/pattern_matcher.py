"""Gitignore-style matching of code file paths against exclude patterns."""

from typing import Iterable

import pathspec


class ExcludePatternMatcher:
    def __init__(self, patterns: Iterable[str]):
        self._spec = pathspec.GitIgnoreSpec.from_lines(list(patterns))

    def matches(self, path: str) -> bool:
        return self._spec.match_file(path.lstrip("/"))
