"""Result shaping for player queries.

Turns the raw stored rows (which may repeat a player name) into the
deduplicated, filtered and optionally ordered lists the API returns, and
provides the substring gate that decides whether a search term is recognized
at all.

Both work on plain attribute access, so ORM rows and simple test doubles can
be fed in directly.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence, TypeVar

T = TypeVar("T")

DEFAULT_MAX_RANKING = 200


@dataclass(frozen=True)
class FieldPredicate:
    """Case-insensitive substring match of ``term`` against one record field."""

    field: str
    term: str

    def matches(self, record: Any) -> bool:
        value = getattr(record, self.field, None)
        if not isinstance(value, str):
            return False
        return self.term.lower() in value.lower()


@dataclass(frozen=True)
class PipelineOptions:
    """How a query shapes its results.

    ``max_ranking`` of ``None`` disables the ranking filter entirely.
    """

    max_ranking: Optional[int] = DEFAULT_MAX_RANKING
    predicate: Optional[FieldPredicate] = None
    sort: bool = True


def _numeric_ranking(record: Any) -> Optional[int]:
    ranking = getattr(record, "ranking", None)
    # bool is an int subclass but never a ranking
    if isinstance(ranking, bool) or not isinstance(ranking, int):
        return None
    return ranking


def within_ranking_bound(record: Any, max_ranking: int) -> bool:
    """Return True if the record has a numeric ranking no greater than the bound."""
    ranking = _numeric_ranking(record)
    return ranking is not None and ranking <= max_ranking


def dedupe_by_name(records: Iterable[T]) -> list[T]:
    """Keep the first record seen for each player name, preserving order."""
    first_by_name: dict[Any, T] = {}
    for record in records:
        name = getattr(record, "name", None)
        if name not in first_by_name:
            first_by_name[name] = record
    return list(first_by_name.values())


def sort_by_ranking(records: Sequence[T]) -> list[T]:
    """Stable ascending sort by ranking; records without one go last."""
    return sorted(
        records,
        key=lambda record: (
            _numeric_ranking(record) is None,
            _numeric_ranking(record) or 0,
        ),
    )


def run_pipeline(records: Iterable[T], options: PipelineOptions) -> list[T]:
    """Filter, deduplicate and (optionally) sort records in store order.

    :param records: Records in store iteration order
    :param options: Ranking bound, field predicate and sort flag
    :returns: Shaped result list; may be empty
    """
    selected = [
        record
        for record in records
        if (
            options.max_ranking is None
            or within_ranking_bound(record, options.max_ranking)
        )
        and (options.predicate is None or options.predicate.matches(record))
    ]
    unique = dedupe_by_name(selected)
    if options.sort:
        return sort_by_ranking(unique)
    return unique


def term_is_recognized(term: str, values: Iterable[Optional[str]]) -> bool:
    """Return True if any value contains ``term``, ignoring case.

    Empty collections and ``None`` values never match.
    """
    needle = term.lower()
    return any(
        isinstance(value, str) and needle in value.lower() for value in values
    )
