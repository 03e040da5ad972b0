"""Fuzzy string matching used to reconcile unnormalised metadata."""

from __future__ import annotations

import re
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from rapidfuzz import fuzz
from rapidfuzz.utils import default_process

from timecollage.config.matching import DEFAULT_TITLE_SIMILARITY_THRESHOLD

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

log = getLogger(__name__)

type Similarity = Callable[[str, str], float]

_LEADING_ARTICLE = re.compile(r"^the\s+")


def string_similarity(left: str, right: str) -> float:
    """Score two strings between 0 and 1, ignoring case and punctuation."""

    if left == right:
        return 1.0
    return fuzz.ratio(left, right, processor=default_process) / 100.0


def artist_similarity(left: str, right: str) -> float:
    """Like :func:`string_similarity`, but "The Beatles" and "Beatles" are the same artist."""

    left, right = (_LEADING_ARTICLE.sub("", default_process(name)) for name in (left, right))
    if left == right:
        return 1.0
    return fuzz.ratio(left, right) / 100.0


@dataclass(frozen=True, slots=True)
class Scored[T]:
    candidate: T
    score: float


def choose_candidate[T](
    wanted_title: str,
    candidates: Sequence[T],
    *,
    title_of: Callable[[T], str],
    ids_of: Callable[[T], Iterable[str | None]] | None = None,
    wanted_id: str | None = None,
    threshold: float = DEFAULT_TITLE_SIMILARITY_THRESHOLD,
    similarity: Similarity = string_similarity,
    context: str = "",
) -> T | None:
    """Pick the candidate that best represents ``wanted_title``.

    An exact external-id match wins outright. Otherwise every candidate scoring at
    least ``threshold`` is plausible and the highest score wins, earlier candidates
    winning ties. Ambiguity is logged, never raised.
    """

    if wanted_id and ids_of is not None:
        for candidate in candidates:
            if wanted_id in set(ids_of(candidate)):
                return candidate

    plausible = [
        Scored(candidate, score)
        for candidate in candidates
        if (score := similarity(wanted_title, title_of(candidate))) >= threshold
    ]
    if not plausible:
        log.debug(
            "No candidate for [%s]%s among %d results cleared threshold %.2f",
            wanted_title,
            f" ({context})" if context else "",
            len(candidates),
            threshold,
        )
        return None

    best = plausible[0]
    for scored in plausible[1:]:
        if scored.score > best.score:
            best = scored
    if len(plausible) > 1:
        log.warning(
            "More than one result for [%s]%s: %d plausible candidates, using [%s] (score %.2f)",
            wanted_title,
            f" ({context})" if context else "",
            len(plausible),
            title_of(best.candidate),
            best.score,
        )
    return best.candidate
