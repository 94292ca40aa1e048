"""Resource linker: validated REST resource link graphs and typed URL templates."""

from .models import (
    ClassName,
    Location,
    HttpVerb,
    SelfLink,
    RelationalLink,
    DeclaredParameter,
    PathParameter,
    QueryParameter,
    PathTemplate,
    Mapping,
    MethodFact,
)
from .errors import Diagnostic, ErrorKind, LinkerError, Severity
from .config import LinkerConfig
from .graph import ResourceGraph
from .validator import ResourceGraphValidator
from .processor import LinkerProcessor, RoundResult
from .extractor import ResourceExtractor

__all__ = [
    "ClassName",
    "Location",
    "HttpVerb",
    "SelfLink",
    "RelationalLink",
    "DeclaredParameter",
    "PathParameter",
    "QueryParameter",
    "PathTemplate",
    "Mapping",
    "MethodFact",
    "Diagnostic",
    "ErrorKind",
    "LinkerError",
    "Severity",
    "LinkerConfig",
    "ResourceGraph",
    "ResourceGraphValidator",
    "LinkerProcessor",
    "RoundResult",
    "ResourceExtractor",
]
