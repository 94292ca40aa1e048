"""Tests for JSON fact records."""

import json

import pytest
from pydantic import ValidationError

from src.resource_linker.models import DeclaredParameter
from src.resource_linker.records import MethodFactRecord, load_facts, parse_facts


PRODUCT_RECORD = {
    "ownerClass": "shop.Product",
    "methodName": "getById",
    "httpVerb": "GET",
    "rawPathTemplate": "/product/{id}",
    "selfMarker": True,
    "declaredParameters": [{"type": "int", "name": "id", "isPathParam": True}],
}


def test_record_to_fact():
    fact = MethodFactRecord.model_validate(PRODUCT_RECORD).to_model()
    
    assert fact.owner_class == "shop.Product"
    assert fact.raw_path == "/product/{id}"
    assert fact.self_marker is True
    assert fact.relational_marker is False
    assert fact.element_kind == "method"
    assert fact.declared_parameters == [DeclaredParameter("int", "id", True)]


def test_snake_case_fields_are_accepted():
    fact = MethodFactRecord.model_validate({
        "owner_class": "shop.Product",
        "method_name": "brand",
        "relational_marker": True,
        "relational_target": "shop.Brand",
    }).to_model()
    
    assert fact.relational_target == "shop.Brand"
    assert fact.raw_path is None
    assert fact.http_verb is None


def test_missing_owner_is_rejected():
    with pytest.raises(ValidationError):
        MethodFactRecord.model_validate({"methodName": "get"})


def test_flat_list_is_one_round():
    rounds = parse_facts([PRODUCT_RECORD, PRODUCT_RECORD])
    
    assert [len(batch) for batch in rounds] == [2]


def test_load_rounds(tmp_path):
    path = tmp_path / "facts.json"
    path.write_text(json.dumps({"rounds": [[PRODUCT_RECORD], []]}), encoding="utf-8")
    
    rounds = load_facts(path)
    
    assert [len(batch) for batch in rounds] == [1, 0]
    assert rounds[0][0].method_name == "getById"
