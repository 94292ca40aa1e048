"""Markers placed on resource classes and methods.

They only record metadata on the decorated object; the extractor reads them
from source code without importing it.
"""


def path(value: str):
    def decorate(target):
        target.__resource_path__ = value
        return target
    return decorate


def self_link(func):
    func.__resource_link__ = ("self", None)
    return func


def sub_resource(target):
    def decorate(func):
        func.__resource_link__ = ("sub_resource", target)
        return func
    return decorate


def _verb(name: str):
    def decorate(func):
        func.__http_verb__ = name
        return func
    decorate.__name__ = name
    return decorate


GET = _verb("GET")
POST = _verb("POST")
PUT = _verb("PUT")
DELETE = _verb("DELETE")
HEAD = _verb("HEAD")
OPTIONS = _verb("OPTIONS")
PATCH = _verb("PATCH")


class PathParam:
    """Default value marking a method argument as a path parameter."""

    def __init__(self, name: str, pattern: str = None):
        self.name = name
        self.pattern = pattern


class QueryParam:
    """Default value marking a method argument as a query parameter."""

    def __init__(self, name: str):
        self.name = name
