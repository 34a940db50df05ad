from __future__ import annotations


class EmailTemplateKey:
    """Template directories under infrastructure/email/templates/<locale>/."""

    REQUEST_SUBMITTED_ADMIN = "request_submitted_admin"
    REQUEST_SUBMITTED_MEMBER = "request_submitted_member"
    REQUEST_STATUS_MEMBER = "request_status_member"
    REQUEST_STATUS_ADMIN = "request_status_admin"


ALL_TEMPLATE_KEYS = {
    EmailTemplateKey.REQUEST_SUBMITTED_ADMIN,
    EmailTemplateKey.REQUEST_SUBMITTED_MEMBER,
    EmailTemplateKey.REQUEST_STATUS_MEMBER,
    EmailTemplateKey.REQUEST_STATUS_ADMIN,
}
