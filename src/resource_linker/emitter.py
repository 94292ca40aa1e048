"""Code emitters turning validated mappings into linker source code."""

import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Iterable, List, Sequence, Tuple

from .enumerator import DescriptorRequest
from .models import ClassName, Mapping, PathParameter

RUNTIME_PACKAGE = __package__


def snake_case(name: str) -> str:
    """``ProductResource`` -> ``product_resource``."""
    name = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", name)
    name = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", name)
    return re.sub(r"\W", "_", name).lower()


def constant_name(name: str) -> str:
    constant = re.sub(r"\W", "_", snake_case(name)).upper()
    if not constant or constant[0].isdigit():
        constant = "_" + constant
    return constant


def constant_names(names: Iterable[str]) -> List[str]:
    """Distinct constant names; a clash gets a numeric suffix (``PRODUCT_ID_2``)."""
    result = []
    taken = set()
    for name in names:
        base = constant = constant_name(name)
        counter = 2
        while constant in taken:
            constant = f"{base}_{counter}"
            counter += 1
        taken.add(constant)
        result.append(constant)
    return result


def linker_method_names(mappings: Sequence[Mapping]) -> List[str]:
    """
    Method name of each mapping in the generated linker.

    The self mapping becomes ``self_link``; relational mappings become
    ``related_<target>``, suffixed with the source method name when the same
    target is reached more than once.
    """
    names = []
    taken = set()
    for mapping in mappings:
        if mapping.is_self:
            name = "self_link"
        else:
            name = f"related_{snake_case(mapping.target.simple_name)}"
            if name in taken:
                name = f"{name}_{snake_case(mapping.location.method_name)}"
        taken.add(name)
        names.append(name)
    return names


class CodeEmitter(ABC):
    """Receives generation requests for each validated resource class."""

    @abstractmethod
    def emit_linker(self, generated_name: ClassName, mappings: Sequence[Mapping]):
        ...

    @abstractmethod
    def emit_path_parameters(self, request: DescriptorRequest):
        ...

    @abstractmethod
    def emit_query_parameters(self, request: DescriptorRequest):
        ...


class RecordingEmitter(CodeEmitter):
    """Keeps every request in memory."""

    def __init__(self):
        self.linkers: Dict[ClassName, Tuple[Mapping, ...]] = {}
        self.path_descriptors: Dict[ClassName, DescriptorRequest] = {}
        self.query_descriptors: Dict[ClassName, DescriptorRequest] = {}

    def emit_linker(self, generated_name, mappings):
        self.linkers[generated_name] = tuple(mappings)

    def emit_path_parameters(self, request):
        self.path_descriptors[request.generated_name] = request

    def emit_query_parameters(self, request):
        self.query_descriptors[request.generated_name] = request


class PythonSourceEmitter(CodeEmitter):
    """Writes one Python module per generated linker or descriptor."""

    HEADER = '"""Generated by resource_linker from {source}. Do not edit."""\n'

    def __init__(self, output_dir):
        self.output_dir = Path(output_dir)

    def module_path(self, generated_name: ClassName) -> Path:
        directory = self.output_dir.joinpath(*generated_name.package.split(".")) \
            if generated_name.package else self.output_dir
        return directory / f"{snake_case(generated_name.simple_name)}.py"

    def _write(self, generated_name: ClassName, text: str) -> Path:
        path = self.module_path(generated_name)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    def emit_linker(self, generated_name, mappings):
        return self._write(generated_name, self.render_linker(generated_name, mappings))

    def emit_path_parameters(self, request):
        return self._write(request.generated_name, self.render_path_parameters(request))

    def emit_query_parameters(self, request):
        return self._write(request.generated_name, self.render_query_parameters(request))

    def render_linker(self, generated_name: ClassName, mappings: Sequence[Mapping]) -> str:
        source = mappings[0].class_name if mappings else generated_name
        lines = [
            self.HEADER.format(source=source),
            f"from {RUNTIME_PACKAGE}.models import PathParameter, QueryParameter",
            f"from {RUNTIME_PACKAGE}.templated_url import TemplatedUrl, get_context_path",
            "",
            "",
            f"class {generated_name.simple_name}:",
            f'    """Links of {source}."""',
        ]
        for name, mapping in zip(linker_method_names(mappings), mappings):
            path_params = ", ".join(
                f"PathParameter({p.declared_type!r}, {p.name!r}, {p.pattern!r})"
                for p in mapping.path_parameters
            )
            query_params = ", ".join(
                f"QueryParameter({q.name!r}, {q.declared_type!r})"
                for q in mapping.query_parameters
            )
            lines += [
                "",
                "    @staticmethod",
                f"    def {name}() -> TemplatedUrl:",
                f'        """{mapping.http_verb.value} {mapping.path.template}"""',
                "        return TemplatedUrl(",
                f"            get_context_path() + {mapping.path.template!r},",
                f"            [{path_params}],",
                f"            [{query_params}],",
                "        )",
            ]
        return "\n".join(lines) + "\n"

    def render_path_parameters(self, request: DescriptorRequest) -> str:
        lines = [
            self.HEADER.format(source=request.generated_name),
            "import re",
            "from enum import Enum",
            "",
            "",
            f"class {request.generated_name.simple_name}(Enum):",
        ]
        constants = constant_names(p.name for p in request.parameters)
        for constant, parameter in zip(constants, request.parameters):
            pattern = parameter.pattern if isinstance(parameter, PathParameter) else None
            lines.append(f"    {constant} = ({parameter.name!r}, {pattern!r})")
        lines += [
            "",
            "    def __init__(self, placeholder, regex):",
            "        self.placeholder = placeholder",
            "        self.regex = re.compile(regex) if regex else None",
        ]
        return "\n".join(lines) + "\n"

    def render_query_parameters(self, request: DescriptorRequest) -> str:
        lines = [
            self.HEADER.format(source=request.generated_name),
            "from enum import Enum",
            "",
            "",
            f"class {request.generated_name.simple_name}(Enum):",
        ]
        constants = constant_names(p.name for p in request.parameters)
        for constant, parameter in zip(constants, request.parameters):
            lines.append(f"    {constant} = {parameter.name!r}")
        lines += [
            "",
            "    @property",
            "    def placeholder(self):",
            "        return self.value",
        ]
        return "\n".join(lines) + "\n"
