"""Tests for mapping construction from method facts."""

import pytest

from src.resource_linker.diagnostics import CollectingSink
from src.resource_linker.errors import ErrorKind
from src.resource_linker.models import (
    ClassName,
    DeclaredParameter,
    HttpVerb,
    Location,
    MethodFact,
    PathParameter,
    RelationalLink,
)
from src.resource_linker.parser import MappingParser
from src.resource_linker.workload import ClassWorkLoad


def self_fact(owner="shop.Product", method="getById", path="/product/{id}", **kwargs):
    values = dict(
        owner_class=owner,
        method_name=method,
        http_verb="GET",
        raw_path=path,
        self_marker=True,
        declared_parameters=[DeclaredParameter("int", "id", True)],
    )
    values.update(kwargs)
    return MethodFact(**values)


def brand_fact(**kwargs):
    values = dict(
        owner_class="shop.Product",
        method_name="getBrandByProductId",
        http_verb="GET",
        raw_path="/product/{id}/brand",
        relational_marker=True,
        relational_target="shop.Brand",
        declared_parameters=[DeclaredParameter("int", "id", True)],
    )
    values.update(kwargs)
    return MethodFact(**values)


class TestMappingParser:
    """Test the construction checks and the workload bookkeeping."""
    
    def setup_method(self):
        self.sink = CollectingSink()
        self.parser = MappingParser(self.sink)
        self.workload = ClassWorkLoad()
    
    def test_self_mapping(self):
        mapping = self.parser.parse(self_fact(), self.workload)
        
        assert mapping.location == Location(ClassName("shop.Product"), "getById")
        assert mapping.http_verb is HttpVerb.GET
        assert mapping.is_self
        assert mapping.path.template == "/product/{id}"
        assert mapping.path_parameters == (PathParameter("int", "id"),)
        assert self.workload.is_completed(ClassName("shop.Product"))
        assert self.sink.diagnostics == []
    
    def test_relational_mapping_records_pending_target(self):
        mapping = self.parser.parse(brand_fact(), self.workload)
        
        assert mapping.link == RelationalLink(ClassName("shop.Brand"))
        assert self.workload.pending() == [ClassName("shop.Brand")]
        assert not self.workload.is_completed(ClassName("shop.Product"))
    
    @pytest.mark.parametrize("fact,kind", [
        (self_fact(element_kind="class"), ErrorKind.NOT_A_METHOD),
        (self_fact(path=None), ErrorKind.NO_PATH_FOUND),
        (self_fact(http_verb=None), ErrorKind.NO_HTTP_VERB),
        (self_fact(http_verb="FETCH"), ErrorKind.NO_HTTP_VERB),
        (self_fact(relational_marker=True, relational_target="shop.Brand"), ErrorKind.ANNOTATION_MISUSE),
        (self_fact(self_marker=False), ErrorKind.ANNOTATION_MISUSE),
        (brand_fact(relational_target=None), ErrorKind.MISSING_RELATIONAL_TARGET),
        (self_fact(declared_parameters=[]), ErrorKind.UNRESOLVED_PLACEHOLDER),
    ])
    def test_construction_errors(self, fact, kind):
        mapping = self.parser.parse(fact, self.workload)
        
        assert mapping is None
        assert [d.kind for d in self.sink.diagnostics] == [kind]
        assert fact.qualified in self.sink.diagnostics[0].message
        assert self.workload.completed() == []
        assert self.workload.pending() == []
    
    @pytest.mark.parametrize("owner", ["shop.Outer$Inner", "", "shop..Product", "1shop.Product"])
    def test_malformed_owner_is_not_a_method(self, owner):
        mapping = self.parser.parse(self_fact(owner=owner), self.workload)
        
        assert mapping is None
        assert [d.kind for d in self.sink.diagnostics] == [ErrorKind.NOT_A_METHOD]
        assert self.workload.completed() == []
    
    def test_malformed_owner_checked_before_path(self):
        self.parser.parse(self_fact(owner="shop.Outer$Inner", path=None), self.workload)
        
        assert [d.kind for d in self.sink.diagnostics] == [ErrorKind.NOT_A_METHOD]
    
    def test_checks_run_in_order(self):
        fact = self_fact(path=None, http_verb=None, relational_marker=True)
        
        self.parser.parse(fact, self.workload)
        
        assert [d.kind for d in self.sink.diagnostics] == [ErrorKind.NO_PATH_FOUND]
    
    def test_second_self_is_rejected(self):
        first = self.parser.parse(self_fact(), self.workload)
        second = self.parser.parse(self_fact(method="getBySlug", path="/product/{id}/slug"), self.workload)
        
        assert first is not None
        assert second is None
        assert [d.kind for d in self.sink.diagnostics] == [ErrorKind.TOO_MANY_SELF]
        assert "shop.Product#getBySlug" in self.sink.diagnostics[0].message
        assert self.workload.flagged() == [ClassName("shop.Product")]
    
    def test_unresolved_placeholder_leaves_ledger_untouched(self):
        self.parser.parse(self_fact(path="/product/{slug}"), self.workload)
        mapping = self.parser.parse(self_fact(), self.workload)
        
        assert mapping is not None
        assert [d.kind for d in self.sink.diagnostics] == [ErrorKind.UNRESOLVED_PLACEHOLDER]
    
    def test_self_completes_previously_pending_class(self):
        self.parser.parse(brand_fact(), self.workload)
        self.parser.parse(self_fact(owner="shop.Brand", method="get", path="/brand/{id}"), self.workload)
        
        assert self.workload.pending() == []
        assert self.workload.is_completed(ClassName("shop.Brand"))
    
    def test_parse_all_keeps_order_and_skips_failures(self):
        facts = [brand_fact(), self_fact(http_verb=None), self_fact()]
        
        mappings = self.parser.parse_all(facts, self.workload)
        
        assert [m.location.method_name for m in mappings] == ["getBrandByProductId", "getById"]
        assert len(self.sink.diagnostics) == 1
