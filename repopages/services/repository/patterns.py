from typing import FrozenSet, Iterable, Iterator, List, Optional


class PatternSet:
    """
    Exclusion patterns attached to a repository.

    Order is irrelevant and entries are unique. Two sets are compared by their
    symmetric difference, which decides whether a change has to be persisted
    and propagated.
    """

    __slots__ = ("_patterns",)

    def __init__(self, patterns: Optional[Iterable[str]] = None):
        self._patterns: FrozenSet[str] = frozenset(
            pattern for pattern in (patterns or ()) if pattern is not None
        )

    @classmethod
    def of(cls, repository) -> "PatternSet":
        return cls(repository.exclude_patterns)

    def __contains__(self, pattern: object) -> bool:
        return pattern in self._patterns

    def __iter__(self) -> Iterator[str]:
        return iter(self.as_list())

    def __len__(self) -> int:
        return len(self._patterns)

    def __bool__(self) -> bool:
        return bool(self._patterns)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PatternSet):
            return NotImplemented
        return self._patterns == other._patterns

    def __hash__(self) -> int:
        return hash(self._patterns)

    def __repr__(self) -> str:
        return f"PatternSet({self.as_list()!r})"

    def difference(self, other: "PatternSet") -> FrozenSet[str]:
        return self._patterns ^ other._patterns

    def differs_from(self, other: "PatternSet") -> bool:
        return bool(self.difference(other))

    def with_pattern(self, pattern: str) -> "PatternSet":
        return PatternSet(self._patterns | {pattern})

    def as_list(self) -> List[str]:
        return sorted(self._patterns)
