"""Error catalog for mapping construction and graph validation."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional

from .models import ClassName, Location


class ErrorKind(Enum):
    NOT_A_METHOD = "NotAMethod"
    NO_PATH_FOUND = "NoPathFound"
    NO_HTTP_VERB = "NoHttpVerb"
    ANNOTATION_MISUSE = "AnnotationMisuse"
    MISSING_RELATIONAL_TARGET = "MissingRelationalTarget"
    UNRESOLVED_PLACEHOLDER = "UnresolvedPlaceholder"
    TOO_MANY_SELF = "TooManySelf"
    MISSING_SELF = "MissingSelf"
    MISSING_ANNOTATIONS = "MissingAnnotations"


class Severity(Enum):
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Diagnostic:
    """One message delivered to a diagnostic sink."""
    kind: ErrorKind
    message: str
    severity: Severity = Severity.ERROR
    subject: Optional[str] = None

    def __str__(self) -> str:
        return f"[{self.severity.value}] {self.kind.value}: {self.message}"


class LinkerError(Exception):
    """Base class of every construction and validation failure."""

    kind: ErrorKind

    def __init__(self, subject: str):
        self.subject = subject
        super().__init__(self.format_message())

    def format_message(self) -> str:
        raise NotImplementedError

    def to_diagnostic(self, severity: Severity = Severity.ERROR) -> Diagnostic:
        return Diagnostic(self.kind, self.format_message(), severity, self.subject)

    def __eq__(self, other) -> bool:
        return (type(self) is type(other)
                and self.format_message() == other.format_message())

    def __hash__(self) -> int:
        return hash((type(self), self.format_message()))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.subject!r})"


class NotAMethod(LinkerError):
    kind = ErrorKind.NOT_A_METHOD

    def format_message(self) -> str:
        return ("Element should be a method, directly wrapped in a class. "
                f"Given element: <{self.subject}>")


class NoPathFound(LinkerError):
    kind = ErrorKind.NO_PATH_FOUND

    def format_message(self) -> str:
        return ("No path could be found. Please make sure @path is set on the "
                f"method or its class. Given method: <{self.subject}>")


class NoHttpVerb(LinkerError):
    kind = ErrorKind.NO_HTTP_VERB

    def format_message(self) -> str:
        return ("No HTTP verb marker found (e.g. @GET, @POST...). "
                f"Given method: <{self.subject}>")


class AnnotationMisuse(LinkerError):
    kind = ErrorKind.ANNOTATION_MISUSE

    def format_message(self) -> str:
        return ("Method should be annotated with exactly one annotation: "
                f"@self_link or @sub_resource. Given method: <{self.subject}>")


class MissingRelationalTarget(LinkerError):
    kind = ErrorKind.MISSING_RELATIONAL_TARGET

    def __init__(self, subject: str, target: Optional[str] = None):
        self.target = target
        super().__init__(subject)

    def format_message(self) -> str:
        shown = "" if self.target is None else f" <{self.target}>"
        return (f"@sub_resource target{shown} is not a valid class name. "
                f"Given method: <{self.subject}>")


class UnresolvedPlaceholder(LinkerError):
    kind = ErrorKind.UNRESOLVED_PLACEHOLDER

    def __init__(self, subject: str, placeholder: str, reason: str = "no declared path parameter"):
        self.placeholder = placeholder
        self.reason = reason
        super().__init__(subject)

    def format_message(self) -> str:
        return (f"Path placeholder {{{self.placeholder}}} cannot be resolved: "
                f"{self.reason}. Given method: <{self.subject}>")


class TooManySelf(LinkerError):
    kind = ErrorKind.TOO_MANY_SELF

    def format_message(self) -> str:
        return ("The enclosing class already defined one @self_link-annotated "
                "method. Only one method should be annotated so. "
                f"Given method: <{self.subject}>")


class MissingSelf(LinkerError):
    kind = ErrorKind.MISSING_SELF

    def __init__(self, class_names: Iterable[ClassName]):
        self.class_names: List[ClassName] = list(class_names)
        super().__init__(", ".join(str(c) for c in self.class_names))

    def format_message(self) -> str:
        listed = "\n\t - ".join(str(c) for c in self.class_names)
        return ("The following classes need exactly 1 method annotated with "
                f"@self_link:\n\t - {listed}")


class MissingAnnotations(LinkerError):
    kind = ErrorKind.MISSING_ANNOTATIONS

    def __init__(self, location: Location):
        self.location = location
        super().__init__(location.qualified)

    def format_message(self) -> str:
        return ("The following method links to an unreachable resource class "
                f"via @sub_resource. Given method: <{self.subject}>")


# Names used by the link classifier contract.
AmbiguousLinkKind = AnnotationMisuse
UnresolvableRelationalTarget = MissingRelationalTarget
