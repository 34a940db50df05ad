"""Merge rules for a member's organisation info document.

Approved requests carry a partial organisation info payload. Applying it must
never discard fields the payload does not mention.
"""

from __future__ import annotations

from typing import Any

SOCIAL_MEDIA_KEY = "socialMediaHandle"


def deep_merge(existing: Any, partial: Any) -> Any:
    """Recursively merge ``partial`` into ``existing``.

    Nested mappings merge key by key, lists and scalars replace, and ``None``
    values in ``partial`` keep whatever ``existing`` holds.
    """
    if partial is None:
        return existing
    if not isinstance(existing, dict) or not isinstance(partial, dict):
        return partial

    result = dict(existing)
    for key, value in partial.items():
        if value is None:
            continue
        if isinstance(value, dict):
            current = result.get(key)
            result[key] = deep_merge(current if isinstance(current, dict) else {}, value)
        else:
            result[key] = value
    return result


def merge_social_media_handles(
    existing: list[dict[str, Any]], incoming: list[dict[str, Any]]
) -> list[dict[str, Any]]:
    """Merge handles unique by title: known titles get the new url, others are appended."""
    merged = [dict(item) for item in existing]
    for item in incoming:
        title = item.get("title")
        match = next((m for m in merged if m.get("title") == title), None)
        if match is not None:
            match["url"] = item.get("url")
        else:
            merged.append({"title": title, "url": item.get("url")})
    return merged


def validate_organisation_info(info: Any) -> None:
    if not isinstance(info, dict):
        raise ValueError("organisationInfo must be an object")
    industries = info.get("industries")
    if industries is not None:
        if not isinstance(industries, list) or not all(isinstance(i, str) for i in industries):
            raise ValueError("industries must be a list of strings")
    address = info.get("address")
    if address is not None and not isinstance(address, dict):
        raise ValueError("address must be an object")
    handles = info.get(SOCIAL_MEDIA_KEY)
    if handles is not None:
        if not isinstance(handles, list):
            raise ValueError(f"{SOCIAL_MEDIA_KEY} must be a list")
        for handle in handles:
            if not isinstance(handle, dict) or not handle.get("title"):
                raise ValueError(f"Each {SOCIAL_MEDIA_KEY} entry needs a title")


def merge_organisation_info(existing: dict[str, Any] | None, incoming: dict[str, Any]) -> dict:
    validate_organisation_info(incoming)
    base = dict(existing or {})
    if SOCIAL_MEDIA_KEY not in incoming:
        return deep_merge(base, incoming)
    rest = {k: v for k, v in incoming.items() if k != SOCIAL_MEDIA_KEY}
    merged = deep_merge(base, rest)
    merged[SOCIAL_MEDIA_KEY] = merge_social_media_handles(
        base.get(SOCIAL_MEDIA_KEY) or [], incoming.get(SOCIAL_MEDIA_KEY) or []
    )
    return merged
