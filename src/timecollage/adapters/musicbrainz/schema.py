"""MusicBrainz response schemas for release lookups."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

type MBId = str


class MusicBrainzBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class MusicBrainzRecordingRef(MusicBrainzBaseModel):
    id: MBId
    title: str
    length: int | None = None


class MusicBrainzTrack(MusicBrainzBaseModel):
    id: MBId
    title: str
    number: str | None = None
    position: int | None = None
    length: int | None = None
    recording: MusicBrainzRecordingRef | None = None

    @property
    def recording_id(self) -> MBId | None:
        return self.recording.id if self.recording is not None else None

    @property
    def duration_ms(self) -> int | None:
        if self.length:
            return self.length
        if self.recording is not None and self.recording.length:
            return self.recording.length
        return None


class MusicBrainzMedium(MusicBrainzBaseModel):
    position: int | None = None
    format: str | None = None
    track_count: int | None = Field(default=None, alias="track-count")
    tracks: list[MusicBrainzTrack] = Field(default_factory=list["MusicBrainzTrack"])


class MusicBrainzRelease(MusicBrainzBaseModel):
    id: MBId
    title: str
    status: str | None = None
    media: list[MusicBrainzMedium] = Field(default_factory=list["MusicBrainzMedium"])

    @property
    def tracks(self) -> list[MusicBrainzTrack]:
        return [track for medium in self.media for track in medium.tracks]


def release_has_media(payload: object) -> bool:
    """Only cache release payloads that can actually answer a duration query."""

    if not isinstance(payload, dict):
        return False
    media = payload.get("media")  # pyright: ignore[reportUnknownMemberType, reportUnknownVariableType]
    return isinstance(media, list) and bool(media)
