from __future__ import annotations

from typing import Any

from pydantic import ConfigDict

from src.interfaces.http.schemas.common import CamelModel


class OrganisationInfoPayload(CamelModel):
    """
    Partial projection of a member's organisation info.
    Every field is optional and unknown keys are kept as sent; structured
    fields are checked when the changes are merged into the member.
    """

    model_config = ConfigDict(extra="allow")

    type_of_the_organization: str | None = None
    company_name: str | None = None
    website_url: str | None = None
    linked_in_url: str | None = None
    industries: list[Any] | None = None
    member_logo_url: str | None = None
    organisation_image_url: str | None = None
    member_video_url: str | None = None
    organisation_questionnaire: dict[str, Any] | None = None
    address: dict[str, Any] | None = None
    signatory_name: str | None = None
    signatory_position: str | None = None
    signature: str | None = None
    member_licence_url: str | None = None
    position: str | None = None
    organisation_contact_number: str | None = None
    social_media_handle: list[Any] | None = None

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_unset=True)
