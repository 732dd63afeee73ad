"""
Request Profiles

A request profile is a declarative HTTP request (method, URL, query object,
headers, body object). Merging a profile with an OverrideSet produces the
concrete, content-type-correct request that is sent over the wire.
"""

import copy
from dataclasses import dataclass
from typing import Any, Dict, Optional
from urllib.parse import parse_qsl, urlsplit, urlunsplit

from multidict import CIMultiDict
from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from ..core.exceptions import UnsupportedContentType, ValidationError
from .encoding import (
    FORM_CONTENT_TYPES,
    JSON_CONTENT_TYPE,
    encode_form,
    encode_json,
    encode_query,
    is_empty_object,
    media_type,
    parse_scalar,
)
from .overrides import OverrideSet

VALID_METHODS = {
    "GET",
    "POST",
    "PUT",
    "DELETE",
    "HEAD",
    "OPTIONS",
    "PATCH",
    "TRACE",
    "CONNECT",
}


@dataclass
class MergedRequest:
    """Dispatch-ready request values produced by RequestProfile.merge."""

    headers: CIMultiDict
    query: Dict[str, Any]
    body: str
    content_type: str


class RequestProfile(BaseModel):
    """Declarative description of one HTTP request."""

    method: str = Field(default="GET", description="HTTP method")
    url: str = Field(description="Request URL")
    params: Optional[Any] = Field(default=None, description="Query object")
    headers: Dict[str, str] = Field(default_factory=dict, description="HTTP headers")
    body: Optional[Any] = Field(default=None, description="Body object")

    @field_validator("method")
    @classmethod
    def validate_method(cls, v: str) -> str:
        if v.upper() not in VALID_METHODS:
            raise ValueError(f"Invalid HTTP method: {v}")
        return v.upper()

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        parts = urlsplit(v)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError(f"Invalid URL: {v}")
        return v

    @field_validator("headers", mode="before")
    @classmethod
    def stringify_headers(cls, v: Any) -> Any:
        if v is None:
            return {}
        if isinstance(v, dict):
            return {str(key): "" if value is None else str(value) for key, value in v.items()}
        return v

    @classmethod
    def from_url(cls, url: str) -> "RequestProfile":
        """
        Build a GET profile from a bare URL.

        Every query parameter is lifted into ``params`` (with scalar
        coercion) and the query string is removed from the URL.
        """
        parts = urlsplit(url.strip())
        params = {
            key: parse_scalar(value)
            for key, value in parse_qsl(parts.query, keep_blank_values=True)
        }
        try:
            return cls(
                method="GET",
                url=urlunsplit(parts._replace(query="")),
                params=params,
                headers={},
                body=None,
            )
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid URL: {url}", {"url": url}) from e

    def validate_shape(self, name: Optional[str] = None) -> None:
        """
        Check that ``params`` and ``body`` are objects when present.

        Raises:
            ValidationError: If either is an array or scalar
        """
        label = f"profile {name!r}" if name else "profile"
        for field_name in ("params", "body"):
            value = getattr(self, field_name)
            if value is not None and not isinstance(value, dict):
                raise ValidationError(
                    f"{field_name} of {label} must be an object but got "
                    f"{type(value).__name__}: {value!r}",
                    {"profile": name, "field": field_name},
                )

    def merge(self, overrides: Optional[OverrideSet] = None) -> MergedRequest:
        """
        Combine the profile with overrides into concrete request values.

        Header overrides are applied first and Content-Type defaults to
        application/json afterwards, so an explicit override always wins.
        Query and body overrides are coerced with ``parse_scalar``. The body
        object is then encoded according to the negotiated content type.

        Raises:
            ValidationError: If params/body are not objects, or a form body
                holds nested values
            UnsupportedContentType: If no encoder exists for the content type
        """
        self.validate_shape()
        overrides = overrides or OverrideSet()

        headers: CIMultiDict = CIMultiDict(self.headers)
        query: Dict[str, Any] = copy.deepcopy(self.params) if self.params is not None else {}
        body: Dict[str, Any] = copy.deepcopy(self.body) if self.body is not None else {}

        for key, value in overrides.headers:
            headers[key] = value
        if "Content-Type" not in headers:
            headers["Content-Type"] = JSON_CONTENT_TYPE

        for key, value in overrides.query:
            query[key] = parse_scalar(value)

        for key, value in overrides.body:
            body[key] = parse_scalar(value)

        content_type = media_type(headers["Content-Type"])
        if content_type == JSON_CONTENT_TYPE:
            text = encode_json(body)
        elif content_type in FORM_CONTENT_TYPES:
            text = encode_form(body)
        else:
            raise UnsupportedContentType(
                f"Unsupported content type: {headers['Content-Type']}",
                {"content_type": headers["Content-Type"], "url": self.url},
            )

        return MergedRequest(
            headers=headers, query=query, body=text, content_type=content_type
        )

    def build_url(self, query: Dict[str, Any]) -> str:
        """Attach ``query`` to the profile URL, replacing any existing query string."""
        if not query:
            return self.url
        parts = urlsplit(self.url)
        return urlunsplit(parts._replace(query=encode_query(query)))

    def get_url(self, overrides: Optional[OverrideSet] = None) -> str:
        """Preview the exact URL that would be requested."""
        merged = self.merge(overrides)
        return self.build_url(merged.query)

    def to_document(self) -> Dict[str, Any]:
        """Plain mapping for YAML output, omitting empty params, headers and body."""
        document: Dict[str, Any] = {"method": self.method, "url": self.url}
        if not is_empty_object(self.params):
            document["params"] = self.params
        if self.headers:
            document["headers"] = dict(self.headers)
        if not is_empty_object(self.body):
            document["body"] = self.body
        return document
