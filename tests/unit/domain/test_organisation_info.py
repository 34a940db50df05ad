from __future__ import annotations

import pytest

from src.domain.models.member import Member
from src.domain.services.organisation_info import (
    deep_merge,
    merge_organisation_info,
    validate_organisation_info,
)
from src.domain.value_objects.request_status import RequestStatus


def test_deep_merge_keeps_keys_missing_from_partial():
    assert deep_merge({"a": 1, "b": 2}, {"b": 3, "c": 4}) == {"a": 1, "b": 3, "c": 4}


def test_deep_merge_recurses_into_nested_objects():
    existing = {"address": {"city": "Dubai", "country": "UAE"}, "companyName": "Old"}
    merged = deep_merge(existing, {"address": {"city": "Sharjah"}})

    assert merged == {"address": {"city": "Sharjah", "country": "UAE"}, "companyName": "Old"}
    assert existing["address"]["city"] == "Dubai"


def test_deep_merge_replaces_lists_and_skips_none():
    merged = deep_merge(
        {"industries": ["Logistics"], "websiteUrl": "https://old"},
        {"industries": ["Finance", "Trade"], "websiteUrl": None},
    )
    assert merged == {"industries": ["Finance", "Trade"], "websiteUrl": "https://old"}


def test_deep_merge_object_over_scalar_starts_fresh():
    assert deep_merge({"address": "n/a"}, {"address": {"city": "Doha"}}) == {
        "address": {"city": "Doha"}
    }


def test_social_media_handles_merge_by_title():
    merged = merge_organisation_info(
        {
            "companyName": "Zone",
            "socialMediaHandle": [
                {"title": "linkedin", "url": "https://li/old"},
                {"title": "facebook", "url": "https://fb/zone"},
            ],
        },
        {"socialMediaHandle": [{"title": "linkedin", "url": "https://li/new"}, {"title": "x"}]},
    )

    assert merged["companyName"] == "Zone"
    assert merged["socialMediaHandle"] == [
        {"title": "linkedin", "url": "https://li/new"},
        {"title": "facebook", "url": "https://fb/zone"},
        {"title": "x", "url": None},
    ]


def test_merge_with_empty_member_document():
    assert merge_organisation_info(None, {"companyName": "New"}) == {"companyName": "New"}


@pytest.mark.parametrize(
    "info, message",
    [
        ([], "organisationInfo must be an object"),
        ({"industries": "Trade"}, "industries must be a list of strings"),
        ({"industries": ["Trade", 3]}, "industries must be a list of strings"),
        ({"address": ["Dubai"]}, "address must be an object"),
        ({"socialMediaHandle": {"title": "x"}}, "socialMediaHandle must be a list"),
        (
            {"socialMediaHandle": [{"url": "https://x"}]},
            "Each socialMediaHandle entry needs a title",
        ),
    ],
)
def test_validate_organisation_info_rejects_malformed_fields(info, message):
    with pytest.raises(ValueError) as excinfo:
        validate_organisation_info(info)
    assert str(excinfo.value) == message


def test_primary_email_prefers_primary_user():
    member = Member.create(
        member_id="M-1",
        user_snapshots=[
            {"email": "second@zone.test", "userType": "Secondary"},
            {"email": "owner@zone.test", "userType": "Primary"},
        ],
    )
    assert member.primary_email == "owner@zone.test"


def test_primary_email_falls_back_to_first_snapshot():
    member = Member.create(member_id="M-1", user_snapshots=[{"email": "only@zone.test"}])
    assert member.primary_email == "only@zone.test"
    assert Member.create(member_id="M-2").primary_email is None


def test_request_status_decisions():
    assert RequestStatus.APPROVED.is_decision()
    assert RequestStatus.REJECTED.is_decision()
    assert not RequestStatus.DRAFT.is_decision()
    assert RequestStatus.values() == ["DRAFT", "PENDING", "APPROVED", "REJECTED"]
