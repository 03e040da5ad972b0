"""Minimal Pydantic models for Spotify track search results."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SpotifyBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class SpotifyArtist(SpotifyBaseModel):
    id: str | None = None
    name: str


class SpotifyAlbum(SpotifyBaseModel):
    id: str | None = None
    name: str
    artists: list[SpotifyArtist] = Field(default_factory=list["SpotifyArtist"])


class SpotifyTrack(SpotifyBaseModel):
    id: str | None = None
    name: str
    duration_ms: int | None = None
    album: SpotifyAlbum | None = None
    artists: list[SpotifyArtist] = Field(default_factory=list["SpotifyArtist"])
    external_ids: dict[str, str] = Field(default_factory=dict)


class SpotifyPage(SpotifyBaseModel):
    href: str | None = None
    limit: int | None = None
    next: str | None = None
    offset: int | None = None
    previous: str | None = None
    total: int | None = None


class SpotifyTracksPage(SpotifyPage):
    items: list[SpotifyTrack] = Field(default_factory=list["SpotifyTrack"])


class SpotifySearchResponse(SpotifyBaseModel):
    tracks: SpotifyTracksPage = Field(default_factory=SpotifyTracksPage)
