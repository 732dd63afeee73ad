"""
Profile Documents

Loads, validates and dumps the YAML documents that hold named profiles:

- xreq documents map a name to a single request profile
- xdiff documents map a name to a pair of request profiles plus the
  response filtering rules used when comparing them
"""

import asyncio
from pathlib import Path
from typing import Any, ClassVar, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from ..comparison.diff import diff_text
from ..comparison.reducer import reduce_response
from ..core.config import get_settings
from ..core.exceptions import ConfigParseError, ProfileNotFound
from ..core.logging import get_logger
from ..request.executor import send
from ..request.overrides import OverrideSet
from ..request.profile import RequestProfile

logger = get_logger(__name__)


class ResponseProfile(BaseModel):
    """Headers and top-level body keys excluded before comparison."""

    skip_headers: List[str] = Field(default_factory=list)
    skip_body: List[str] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.skip_headers and not self.skip_body

    def to_document(self) -> Dict[str, Any]:
        document: Dict[str, Any] = {}
        if self.skip_headers:
            document["skip_headers"] = list(self.skip_headers)
        if self.skip_body:
            document["skip_body"] = list(self.skip_body)
        return document


class DiffProfile(BaseModel):
    """Two request profiles whose responses are compared."""

    req1: RequestProfile
    req2: RequestProfile
    res: ResponseProfile = Field(default_factory=ResponseProfile)

    def validate_shape(self, name: Optional[str] = None) -> None:
        self.req1.validate_shape(f"{name}.req1" if name else "req1")
        self.req2.validate_shape(f"{name}.req2" if name else "req2")

    async def diff(
        self,
        overrides: Optional[OverrideSet] = None,
        color: bool = False,
        context: Optional[int] = None,
    ) -> str:
        """
        Send both requests concurrently and diff their reduced responses.

        The same overrides are applied to both requests. A failure in either
        request aborts the whole comparison.
        """
        response1, response2 = await asyncio.gather(
            send(self.req1, overrides), send(self.req2, overrides)
        )

        text1 = reduce_response(response1, self.res.skip_headers, self.res.skip_body)
        text2 = reduce_response(response2, self.res.skip_headers, self.res.skip_body)

        if context is None:
            context = get_settings().context_lines
        return diff_text(text1, text2, context=context, color=color)

    def to_document(self) -> Dict[str, Any]:
        document: Dict[str, Any] = {
            "req1": self.req1.to_document(),
            "req2": self.req2.to_document(),
        }
        if not self.res.is_empty():
            document["res"] = self.res.to_document()
        return document


class ProfileDocument(BaseModel):
    """Base for named-profile documents; subclasses fix the profile type."""

    kind: ClassVar[str] = "profile"

    profiles: Dict[str, Any] = Field(default_factory=dict)
    source: str = Field(default="<string>", exclude=True)

    @classmethod
    def load_yaml(cls, path: Union[str, Path]):
        """
        Load and validate a document from a YAML file.

        Raises:
            ConfigParseError: If the file cannot be read or parsed
            ValidationError: If a profile has non-object params/body
        """
        path = Path(path)
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigParseError(
                f"Failed to read {cls.kind} config {path}: {e}", {"path": str(path)}
            ) from e
        return cls.from_yaml(content, source=str(path))

    @classmethod
    def from_yaml(cls, content: str, source: str = "<string>"):
        """Parse and validate a document from YAML text."""
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigParseError(
                f"Failed to parse {cls.kind} config {source}: {e}", {"source": source}
            ) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigParseError(
                f"{cls.kind} config {source} must be a mapping of profile names",
                {"source": source},
            )

        try:
            config = cls(profiles=data, source=source)
        except PydanticValidationError as e:
            raise ConfigParseError(
                f"Invalid {cls.kind} config {source}: {e}", {"source": source}
            ) from e

        config.validate_profiles()
        logger.info("Loaded %d %s profile(s) from %s", len(config.profiles), cls.kind, source)
        return config

    def validate_profiles(self) -> None:
        for name, profile in self.profiles.items():
            profile.validate_shape(name)

    def get_profile(self, name: str):
        """
        Look up a profile by name.

        Raises:
            ProfileNotFound: If no profile has that name
        """
        try:
            return self.profiles[name]
        except KeyError:
            raise ProfileNotFound(
                f"Profile {name} not found in config file {self.source}",
                {"profile": name, "available": sorted(self.profiles)},
            ) from None

    def to_yaml(self) -> str:
        document = {name: profile.to_document() for name, profile in self.profiles.items()}
        return yaml.safe_dump(document, sort_keys=False, allow_unicode=True)


class RequestConfig(ProfileDocument):
    """xreq document: name -> request profile."""

    kind: ClassVar[str] = "xreq"

    profiles: Dict[str, RequestProfile] = Field(default_factory=dict)


class DiffConfig(ProfileDocument):
    """xdiff document: name -> request pair with comparison rules."""

    kind: ClassVar[str] = "xdiff"

    profiles: Dict[str, DiffProfile] = Field(default_factory=dict)
