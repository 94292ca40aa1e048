"""Path template compiler: raw template string to typed segments and parameters."""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from .errors import UnresolvedPlaceholder
from .models import (
    DeclaredParameter,
    LiteralSegment,
    PathParameter,
    PathSegment,
    PathTemplate,
    PlaceholderSegment,
    QueryParameter,
)


@dataclass(frozen=True)
class CompiledPath:
    """Result of compiling one raw path template."""
    template: PathTemplate
    path_parameters: Tuple[PathParameter, ...]
    query_parameters: Tuple[QueryParameter, ...]


@dataclass(frozen=True)
class _Placeholder:
    name: str
    pattern: Optional[str]
    raw: str


def join_paths(*parts: Optional[str]) -> Optional[str]:
    """
    Join class-level and method-level paths with exactly one slash between them.

    Returns None when no part is present, so callers can tell a missing path
    from the root path.
    """
    present = [p for p in parts if p is not None]
    if not present:
        return None
    pieces = [p.strip("/") for p in present]
    joined = "/".join(p for p in pieces if p)
    return "/" + joined


def scan(raw: str, subject: str = "<unknown>") -> List[object]:
    """
    Split a raw template into literal strings and placeholders, left to right.

    Placeholders are ``{name}`` or ``{name: regex}``; braces inside the regex
    must be balanced.
    """
    tokens: List[object] = []
    literal: List[str] = []
    i = 0
    while i < len(raw):
        char = raw[i]
        if char != "{":
            if char == "}":
                raise UnresolvedPlaceholder(subject, "}", "unmatched closing brace")
            literal.append(char)
            i += 1
            continue

        depth = 0
        end = i
        while end < len(raw):
            if raw[end] == "{":
                depth += 1
            elif raw[end] == "}":
                depth -= 1
                if depth == 0:
                    break
            end += 1
        if end >= len(raw):
            raise UnresolvedPlaceholder(subject, raw[i + 1:], "unterminated placeholder")

        if literal:
            tokens.append("".join(literal))
            literal = []
        body = raw[i + 1:end]
        name, _, pattern = body.partition(":")
        name = name.strip()
        if not name:
            raise UnresolvedPlaceholder(subject, body, "empty placeholder name")
        tokens.append(_Placeholder(name, pattern.strip() or None, raw[i:end + 1]))
        i = end + 1

    if literal:
        tokens.append("".join(literal))
    return tokens


def compile_path(raw: str,
                 declared: Sequence[DeclaredParameter],
                 subject: str = "<unknown>") -> CompiledPath:
    """
    Compile a raw path template against the declared parameters of a method.

    Args:
        raw: Template string, e.g. ``/product/{id}/brand``
        declared: Parameters in declaration order
        subject: Qualified method name used in error messages

    Returns:
        CompiledPath with path parameters ordered by first appearance in the
        template and query parameters in declaration order

    Raises:
        UnresolvedPlaceholder: If a placeholder does not match exactly one
            declared path parameter
    """
    candidates: Dict[str, List[DeclaredParameter]] = {}
    for parameter in declared:
        if parameter.is_path_param:
            candidates.setdefault(parameter.name, []).append(parameter)

    segments: List[PathSegment] = []
    path_parameters: List[PathParameter] = []
    referenced = set()

    for token in scan(raw, subject):
        if isinstance(token, str):
            segments.append(LiteralSegment(token))
            continue

        matches = candidates.get(token.name, [])
        if not matches:
            raise UnresolvedPlaceholder(subject, token.name)
        if len(matches) > 1:
            raise UnresolvedPlaceholder(subject, token.name,
                                        "declared by more than one path parameter")

        segments.append(PlaceholderSegment(token.name, token.raw))
        if token.name not in referenced:
            referenced.add(token.name)
            match = matches[0]
            path_parameters.append(
                PathParameter(match.declared_type, match.name, match.pattern or token.pattern)
            )

    # Anything declared but absent from the template travels in the query string.
    query_parameters = []
    seen_query = set()
    for parameter in declared:
        if parameter.name in referenced or parameter.name in seen_query:
            continue
        seen_query.add(parameter.name)
        query_parameters.append(QueryParameter(parameter.name, parameter.declared_type))

    return CompiledPath(
        template=PathTemplate(tuple(segments)),
        path_parameters=tuple(path_parameters),
        query_parameters=tuple(query_parameters),
    )
