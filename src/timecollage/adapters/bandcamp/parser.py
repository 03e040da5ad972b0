"""HTML scraping helpers for Bandcamp search and track pages."""

from __future__ import annotations

import json
from dataclasses import dataclass
from html.parser import HTMLParser
from urllib.parse import urlsplit, urlunsplit

from timecollage.domain.ports import ProviderLookupError


class BandcampScrapeError(ProviderLookupError):
    """Raised when a Bandcamp page does not have the expected structure."""


@dataclass(frozen=True, slots=True)
class SearchResult:
    title: str
    url: str
    item_type: str | None = None
    subhead: str | None = None

    @property
    def is_track(self) -> bool:
        return self.item_type is None or self.item_type.upper() == "TRACK"


def _classes(attrs: list[tuple[str, str | None]]) -> set[str]:
    for name, value in attrs:
        if name == "class" and value:
            return set(value.split())
    return set()


def _strip_query(url: str) -> str:
    parts = urlsplit(url)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))


class _SearchResultsParser(HTMLParser):
    """Collects ``li.searchresult`` entries: item type, heading link and subhead."""

    _TEXT_FIELDS = ("itemtype", "heading", "subhead")

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.results: list[SearchResult] = []
        self._in_result = False
        self._result_depth = 0
        self._field: str | None = None
        self._field_depth = 0
        self._text: dict[str, list[str]] = {}
        self._href: str | None = None

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        classes = _classes(attrs)
        if tag == "li" and "searchresult" in classes:
            self._in_result = True
            self._result_depth = 0
            self._text = {}
            self._href = None
            return
        if not self._in_result:
            return
        if tag == "li":
            self._result_depth += 1
        if self._field is not None:
            if tag == "div":
                self._field_depth += 1
        elif tag == "div":
            for name in self._TEXT_FIELDS:
                if name in classes:
                    self._field = name
                    self._field_depth = 0
                    break
        if tag == "a" and self._field == "heading" and self._href is None:
            self._href = dict(attrs).get("href")

    def handle_endtag(self, tag: str) -> None:
        if not self._in_result:
            return
        if self._field is not None:
            if tag == "div":
                if self._field_depth == 0:
                    self._field = None
                else:
                    self._field_depth -= 1
            return
        if tag == "li":
            if self._result_depth == 0:
                self._finish_result()
            else:
                self._result_depth -= 1

    def handle_data(self, data: str) -> None:
        if self._in_result and self._field is not None:
            self._text.setdefault(self._field, []).append(data)

    def _finish_result(self) -> None:
        self._in_result = False
        title = self._joined("heading")
        if title and self._href:
            self.results.append(
                SearchResult(
                    title=title,
                    url=_strip_query(self._href),
                    item_type=self._joined("itemtype"),
                    subhead=self._joined("subhead"),
                )
            )

    def _joined(self, name: str) -> str | None:
        text = " ".join(" ".join(self._text.get(name, [])).split())
        return text or None


class _TralbumParser(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.tralbum: str | None = None

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if self.tralbum is not None:
            return
        for name, value in attrs:
            if name == "data-tralbum" and value:
                self.tralbum = value
                return


def parse_search_results(html: str) -> list[SearchResult]:
    parser = _SearchResultsParser()
    parser.feed(html)
    parser.close()
    return parser.results


def parse_track_duration_ms(html: str) -> int | None:
    """Read ``trackinfo[0].duration`` (seconds) from the page's ``data-tralbum`` JSON."""

    parser = _TralbumParser()
    parser.feed(html)
    parser.close()
    if parser.tralbum is None:
        raise BandcampScrapeError("Bandcamp page has no data-tralbum attribute")

    try:
        tralbum = json.loads(parser.tralbum)
    except json.JSONDecodeError as exc:
        raise BandcampScrapeError("Bandcamp data-tralbum is not valid JSON") from exc

    trackinfo = tralbum.get("trackinfo") if isinstance(tralbum, dict) else None
    if not isinstance(trackinfo, list) or not trackinfo:
        raise BandcampScrapeError("Bandcamp data-tralbum has no trackinfo")

    first = trackinfo[0]
    duration = first.get("duration") if isinstance(first, dict) else None
    if isinstance(duration, bool) or not isinstance(duration, int | float) or duration <= 0:
        return None
    return round(duration * 1000)
