"""Runtime support for generated linkers: parameter substitution in URL templates."""

import re
from typing import Dict, List, Optional, Sequence, Tuple
from urllib.parse import quote, urlencode

from .models import PathParameter, QueryParameter


_context_path = ""


def set_context_path(context_path: str) -> None:
    """Set the prefix prepended to every URL built by generated linkers."""
    global _context_path
    _context_path = (context_path or "").rstrip("/")


def get_context_path() -> str:
    return _context_path


class TemplatedUrl:
    """
    URL template whose placeholders are substituted one parameter at a time.

    Instances are immutable; ``replace`` and ``append_query`` return new ones.
    """

    def __init__(self,
                 template: str,
                 path_parameters: Sequence[PathParameter] = (),
                 query_parameters: Sequence[QueryParameter] = (),
                 _values: Optional[Dict[str, str]] = None,
                 _query: Tuple[Tuple[str, str], ...] = ()):
        self.template = template
        self.path_parameters: List[PathParameter] = list(path_parameters)
        self.query_parameters: List[QueryParameter] = list(query_parameters)
        self._values = dict(_values or {})
        self._query = _query

    def _copy(self, values=None, query=None) -> "TemplatedUrl":
        return TemplatedUrl(
            self.template,
            self.path_parameters,
            self.query_parameters,
            self._values if values is None else values,
            self._query if query is None else query,
        )

    def replace(self, name: str, value) -> "TemplatedUrl":
        """
        Substitute one path parameter.

        Raises:
            ValueError: If the parameter is unknown or the value does not
                match its pattern
        """
        parameter = next((p for p in self.path_parameters if p.name == name), None)
        if parameter is None:
            raise ValueError(f"Unknown path parameter: {name}")
        text = str(value)
        if parameter.pattern and re.fullmatch(parameter.pattern, text) is None:
            raise ValueError(
                f"Value {text!r} does not match pattern {parameter.pattern!r} of {name}"
            )
        values = dict(self._values)
        values[name] = quote(text, safe="")
        return self._copy(values=values)

    def append_query(self, name: str, value) -> "TemplatedUrl":
        if not any(p.name == name for p in self.query_parameters):
            raise ValueError(f"Unknown query parameter: {name}")
        return self._copy(query=self._query + ((name, str(value)),))

    def missing(self) -> List[str]:
        return [p.name for p in self.path_parameters if p.name not in self._values]

    def value(self) -> str:
        """
        The concrete URL.

        Raises:
            ValueError: If some path parameters were never substituted
        """
        missing = self.missing()
        if missing:
            raise ValueError(f"Unsubstituted path parameters: {', '.join(missing)}")
        url = self.template
        for name, replacement in self._values.items():
            url = url.replace("{" + name + "}", replacement)
        if self._query:
            url = f"{url}?{urlencode(self._query)}"
        return url

    def __eq__(self, other) -> bool:
        if not isinstance(other, TemplatedUrl):
            return NotImplemented
        return (self.template == other.template
                and self.path_parameters == other.path_parameters
                and self.query_parameters == other.query_parameters
                and self._values == other._values
                and self._query == other._query)

    def __repr__(self) -> str:
        return f"TemplatedUrl({self.template!r})"
