"""Core data models for the resource linker."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union


@dataclass(frozen=True, order=True)
class ClassName:
    """Qualified, dot-delimited class identifier."""
    name: str

    @classmethod
    def value_of(cls, text: str) -> "ClassName":
        """
        Build a ClassName from its qualified string form.

        Raises:
            ValueError: If the name is empty or any dotted part is not an identifier
        """
        if not text or not isinstance(text, str):
            raise ValueError("Class name must be a non-empty string")
        parts = text.split(".")
        if not all(part.isidentifier() for part in parts):
            raise ValueError(f"Invalid qualified class name: {text!r}")
        return cls(text)

    @property
    def simple_name(self) -> str:
        return self.name.rsplit(".", 1)[-1]

    @property
    def package(self) -> str:
        if "." not in self.name:
            return ""
        return self.name.rsplit(".", 1)[0]

    def append(self, suffix: str) -> "ClassName":
        """Return a new name whose simple name ends with ``suffix``."""
        return ClassName.value_of(self.name + suffix)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Location:
    """Owning class and method name of a mapping."""
    class_name: ClassName
    method_name: str

    @property
    def qualified(self) -> str:
        return f"{self.class_name}#{self.method_name}"

    def __str__(self) -> str:
        return self.qualified


class HttpVerb(Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    PATCH = "PATCH"

    @classmethod
    def parse(cls, text: Optional[str]) -> Optional["HttpVerb"]:
        """Case-insensitive lookup, None for missing or unknown verbs."""
        if not text:
            return None
        try:
            return cls(text.strip().upper())
        except ValueError:
            return None


class LinkType(Enum):
    SELF = "SELF"
    SUB_RESOURCE = "SUB_RESOURCE"


@dataclass(frozen=True)
class SelfLink:
    """Link kind of the canonical mapping of a resource class."""

    @property
    def link_type(self) -> LinkType:
        return LinkType.SELF

    @property
    def target(self) -> Optional[ClassName]:
        return None


@dataclass(frozen=True)
class RelationalLink:
    """Link kind of a mapping that reaches a sub-resource of another class."""
    target: ClassName

    @property
    def link_type(self) -> LinkType:
        return LinkType.SUB_RESOURCE


LinkKind = Union[SelfLink, RelationalLink]


@dataclass(frozen=True)
class DeclaredParameter:
    """A method parameter as reported by a fact extractor."""
    declared_type: str
    name: str
    is_path_param: bool
    pattern: Optional[str] = None


@dataclass(frozen=True)
class PathParameter:
    """Typed placeholder of a path template."""
    declared_type: str
    name: str
    pattern: Optional[str] = None


@dataclass(frozen=True)
class QueryParameter:
    """Query string parameter accepted by a mapping."""
    name: str
    declared_type: Optional[str] = None


@dataclass(frozen=True)
class LiteralSegment:
    text: str

    @property
    def raw(self) -> str:
        return self.text


@dataclass(frozen=True)
class PlaceholderSegment:
    """Reference to a path parameter; ``raw`` keeps the exact source text."""
    name: str
    raw: str


PathSegment = Union[LiteralSegment, PlaceholderSegment]


@dataclass(frozen=True)
class PathTemplate:
    """Ordered sequence of literal and placeholder segments."""
    segments: Tuple[PathSegment, ...]

    @property
    def raw(self) -> str:
        """The template string exactly as it was compiled."""
        return "".join(segment.raw for segment in self.segments)

    @property
    def template(self) -> str:
        """The template with inline patterns stripped (``/product/{id}``)."""
        parts = []
        for segment in self.segments:
            if isinstance(segment, PlaceholderSegment):
                parts.append("{" + segment.name + "}")
            else:
                parts.append(segment.text)
        return "".join(parts)

    @property
    def placeholders(self) -> List[str]:
        return [s.name for s in self.segments if isinstance(s, PlaceholderSegment)]

    def __str__(self) -> str:
        return self.template


@dataclass(frozen=True)
class Mapping:
    """Validated link of one resource method."""
    location: Location
    http_verb: HttpVerb
    link: LinkKind
    path: PathTemplate
    path_parameters: Tuple[PathParameter, ...] = ()
    query_parameters: Tuple[QueryParameter, ...] = ()

    @property
    def class_name(self) -> ClassName:
        return self.location.class_name

    @property
    def is_self(self) -> bool:
        return self.link.link_type is LinkType.SELF

    @property
    def target(self) -> Optional[ClassName]:
        return self.link.target


@dataclass
class MethodFact:
    """Raw facts extracted from one annotated element."""
    owner_class: str
    method_name: str
    http_verb: Optional[str] = None
    raw_path: Optional[str] = None
    self_marker: bool = False
    relational_marker: bool = False
    relational_target: Optional[str] = None
    declared_parameters: List[DeclaredParameter] = field(default_factory=list)
    element_kind: str = "method"  # method, class, function, field
    source: Optional[str] = None  # file:line, diagnostics only

    @property
    def qualified(self) -> str:
        return f"{self.owner_class}#{self.method_name}"
