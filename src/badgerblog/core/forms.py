from __future__ import annotations

import re
from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..errors import UnknownFormError

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_URL_RE = re.compile(r"^(https?|ftp)://[^\s/$.?#].[^\s]*$", re.IGNORECASE)
_SLUG_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")

ATTACHMENT_EXTENSIONS = "png,jpg,jpeg,gif"


class PostForm(BaseModel):
    """New or edited blog post."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1, max_length=200, title="Title")
    slug: str = Field(min_length=1, max_length=120, title="Slug")
    body: str = Field(min_length=1, title="Body")
    tags: str = Field(default="", max_length=500, title="Tags")
    published_at: Optional[date] = Field(
        default=None,
        title="Publish date",
        json_schema_extra={"client_rules": {"date": {}}},
    )

    @field_validator("slug")
    @classmethod
    def check_slug(cls, v: str) -> str:
        if not _SLUG_RE.match(v):
            raise ValueError("slug may contain only lower-case letters, digits and single dashes")
        return v


class CommentForm(BaseModel):
    """Reader comment on a post."""

    model_config = ConfigDict(str_strip_whitespace=True)

    author: str = Field(min_length=1, max_length=100, title="Name")
    email: str = Field(
        max_length=254,
        title="E-mail",
        json_schema_extra={"client_rules": {"email": {}}},
    )
    confirm_email: str = Field(
        title="Confirm e-mail",
        json_schema_extra={"client_rules": {"email": {}, "equalto": {"other": "email"}}},
    )
    url: Optional[str] = Field(
        default=None,
        max_length=2048,
        title="Website",
        json_schema_extra={"client_rules": {"url": {}}},
    )
    body: str = Field(min_length=1, max_length=5000, title="Comment")
    attachment: Optional[str] = Field(
        default=None,
        title="Attachment",
        json_schema_extra={"client_rules": {"extension": {"extensions": ATTACHMENT_EXTENSIONS}}},
    )

    @field_validator("email", "confirm_email")
    @classmethod
    def check_email(cls, v: str) -> str:
        if not _EMAIL_RE.match(v):
            raise ValueError("not a valid e-mail address")
        return v

    @field_validator("url")
    @classmethod
    def check_url(cls, v: Optional[str]) -> Optional[str]:
        if v is None or v == "":
            return None
        if not _URL_RE.match(v):
            raise ValueError("not a valid fully-qualified http, https, or ftp URL")
        return v

    @field_validator("attachment")
    @classmethod
    def check_attachment(cls, v: Optional[str]) -> Optional[str]:
        if v is None or v == "":
            return None
        allowed = {e for e in ATTACHMENT_EXTENSIONS.split(",")}
        ext = v.rsplit(".", 1)[-1].lower() if "." in v else ""
        if ext not in allowed:
            raise ValueError(f"only {', '.join(sorted(allowed))} files are accepted")
        return v

    @model_validator(mode="after")
    def check_emails_match(self) -> "CommentForm":
        if self.email != self.confirm_email:
            raise ValueError("'E-mail' and 'Confirm e-mail' do not match")
        return self


FORMS: dict[str, type[BaseModel]] = {
    "post": PostForm,
    "comment": CommentForm,
}


def get_form(name: str) -> type[BaseModel]:
    try:
        return FORMS[str(name).strip().lower()]
    except KeyError:
        raise UnknownFormError(f"Unknown form: {name}") from None
