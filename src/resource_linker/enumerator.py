"""Distinct path and query parameters of a resource class."""

from dataclasses import dataclass
from typing import Iterable, List, Tuple, Union

from .models import ClassName, Mapping, PathParameter, QueryParameter

PATH = "path"
QUERY = "query"


@dataclass(frozen=True)
class DescriptorRequest:
    """Request to emit one parameter descriptor for a class."""
    kind: str  # path, query
    generated_name: ClassName
    parameters: Tuple[Union[PathParameter, QueryParameter], ...]


def path_parameters(mappings: Iterable[Mapping]) -> List[PathParameter]:
    """Union of path parameters by name; the first declaration seen wins."""
    seen = {}
    for mapping in mappings:
        for parameter in mapping.path_parameters:
            seen.setdefault(parameter.name, parameter)
    return list(seen.values())


def query_parameters(mappings: Iterable[Mapping]) -> List[QueryParameter]:
    seen = {}
    for mapping in mappings:
        for parameter in mapping.query_parameters:
            seen.setdefault(parameter.name, parameter)
    return list(seen.values())


def descriptor_requests(class_name: ClassName,
                        mappings: Iterable[Mapping],
                        path_suffix: str = "PathParameters",
                        query_suffix: str = "QueryParameters") -> List[DescriptorRequest]:
    """Descriptor requests for a class, skipping empty parameter sets."""
    mappings = list(mappings)
    requests = []
    paths = path_parameters(mappings)
    if paths:
        requests.append(DescriptorRequest(PATH, class_name.append(path_suffix), tuple(paths)))
    queries = query_parameters(mappings)
    if queries:
        requests.append(DescriptorRequest(QUERY, class_name.append(query_suffix), tuple(queries)))
    return requests
