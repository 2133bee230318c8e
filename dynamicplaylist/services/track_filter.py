"""Tag-predicate filtering of tracks.

A track is a candidate only if at least one tag references it. For a candidate
with tag set ``T`` the predicates are ``tag in T`` for each included tag and
``tag not in T`` for each excluded tag. ``ALL`` passes when every predicate
holds, so an empty predicate list passes every candidate; ``ANY`` passes when
at least one holds, so an empty predicate list passes nothing.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable, Mapping
from functools import reduce
from types import MappingProxyType

from dynamicplaylist.schema.generation import FilterMode


class NoTracksError(Exception):
    """The filter matched no tracks."""

    def __init__(self) -> None:
        super().__init__("No tracks match the requested tags")


def _add_track(index: dict[str, frozenset[int]], entry: tuple[int, str]) -> dict[str, frozenset[int]]:
    tag_id, track_id = entry
    index[track_id] = index.get(track_id, frozenset()) | {tag_id}
    return index


def build_track_index(tag_to_tracks: Mapping[int, Iterable[str]]) -> Mapping[str, frozenset[int]]:
    """Invert tag -> tracks into track -> tags, keeping first-seen track order."""
    entries = ((tag_id, track_id) for tag_id, tracks in tag_to_tracks.items() for track_id in tracks)
    return MappingProxyType(reduce(_add_track, entries, {}))


def _passes(tags: frozenset[int], include: Collection[int], exclude: Collection[int], mode: FilterMode) -> bool:
    predicates = [tag_id in tags for tag_id in include] + [tag_id not in tags for tag_id in exclude]
    if mode is FilterMode.ALL:
        return all(predicates)
    return any(predicates)


def filter_tracks(
    tag_to_tracks: Mapping[int, Iterable[str]],
    include: Collection[int],
    exclude: Collection[int],
    mode: FilterMode,
) -> list[str]:
    """Return the tracks passing the include/exclude predicates under ``mode``.

    Raises ``NoTracksError`` when nothing passes.
    """
    mode = FilterMode(mode)
    index = build_track_index(tag_to_tracks)
    tracks = [track_id for track_id, tags in index.items() if _passes(tags, include, exclude, mode)]
    if not tracks:
        raise NoTracksError()
    return tracks
