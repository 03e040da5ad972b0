"""Pydantic models describing the Last.fm API payloads."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Literal, cast

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

ImageSize = Literal["small", "medium", "large", "extralarge", "mega", ""]


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class LastFmBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ImageModel(LastFmBaseModel):
    size: ImageSize = ""
    url: str = Field(default="", alias="#text")


class ArtistPayload(LastFmBaseModel):
    name: str | None = None
    mbid: str | None = None
    url: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _normalize_compact_schema(cls, value: object) -> object:
        # Non-extended responses carry the artist name under "#text".
        if isinstance(value, Mapping):
            mapping_value = cast(Mapping[str, object], value)
            if "#text" in mapping_value and "name" not in mapping_value:
                data: dict[str, object] = dict(mapping_value)
                data["name"] = data.get("#text")
                return data
            return mapping_value
        return value

    _normalize_name = field_validator("name", mode="before")(_blank_to_none)
    _normalize_mbid = field_validator("mbid", mode="before")(_blank_to_none)


class AlbumPayload(LastFmBaseModel):
    mbid: str | None = None
    title: str | None = Field(default=None, alias="#text")

    _normalize_mbid = field_validator("mbid", "title", mode="before")(_blank_to_none)


class TrackAttr(LastFmBaseModel):
    nowplaying: str | None = None


class DatePayload(LastFmBaseModel):
    uts: int
    text: str = Field(default="", alias="#text")

    @field_validator("uts", mode="before")
    @classmethod
    def _parse_epoch(cls, value: int | str) -> int:
        return int(value)


class TrackPayload(LastFmBaseModel):
    artist: ArtistPayload = Field(default_factory=ArtistPayload)
    image: list[ImageModel] = Field(default_factory=list["ImageModel"])
    mbid: str | None = None
    album: AlbumPayload = Field(default_factory=AlbumPayload)
    name: str
    url: str | None = None
    date: DatePayload | None = None
    attr: TrackAttr | None = Field(default=None, alias="@attr")

    _normalize_mbid = field_validator("mbid", mode="before")(_blank_to_none)

    @property
    def is_now_playing(self) -> bool:
        return self.attr is not None and self.attr.nowplaying == "true"


class ResponseAttr(LastFmBaseModel):
    user: str
    total_pages: int = Field(alias="totalPages")
    page: int
    per_page: int = Field(alias="perPage")
    total: int

    @field_validator("total_pages", "page", "per_page", "total", mode="before")
    @classmethod
    def _parse_int(cls, value: int | str) -> int:
        return int(value)


class RecentTracks(LastFmBaseModel):
    track: list[TrackPayload] = Field(default_factory=list["TrackPayload"])
    attr: ResponseAttr = Field(alias="@attr")

    @field_validator("track", mode="before")
    @classmethod
    def _wrap_single_track(cls, value: object) -> object:
        # A page holding exactly one scrobble comes back as an object, not a list.
        if isinstance(value, Mapping):
            return [value]
        return value


class RecentTracksResponse(LastFmBaseModel):
    recenttracks: RecentTracks


class TrackInfo(LastFmBaseModel):
    name: str
    mbid: str | None = None
    duration_ms: int | None = Field(default=None, alias="duration")

    _normalize_mbid = field_validator("mbid", mode="before")(_blank_to_none)

    @field_validator("duration_ms", mode="before")
    @classmethod
    def _parse_duration(cls, value: object) -> object:
        if isinstance(value, str):
            stripped = value.strip()
            return int(stripped) if stripped.isdigit() else None
        return value


class TrackInfoResponse(LastFmBaseModel):
    track: TrackInfo


class ErrorResponse(LastFmBaseModel):
    error: int
    message: str


def should_cache_payload(payload: object) -> bool:
    """Never cache a recent-tracks page that still contains a now-playing entry."""

    if not isinstance(payload, Mapping) or "recenttracks" not in payload:
        return True
    response = RecentTracksResponse.model_validate(payload)
    return not any(track.is_now_playing for track in response.recenttracks.track)


TrackPayloadInput = TrackPayload | Mapping[str, object]
