"""Tests for generated linker source code."""

from src.resource_linker.emitter import (
    PythonSourceEmitter,
    RecordingEmitter,
    constant_name,
    constant_names,
    linker_method_names,
    snake_case,
)
from src.resource_linker.enumerator import descriptor_requests
from src.resource_linker.models import ClassName

from builders import make_mapping


PRODUCT = ClassName("shop.ProductResource")


def product_mappings():
    return [
        make_mapping("shop.ProductResource", "getById", "/product/{id: [0-9]+}", params=[("int", "id")]),
        make_mapping("shop.ProductResource", "getBrandByProductId", "/product/{id}/brand",
                     target="shop.BrandResource", params=[("int", "id")], queries=["lang"]),
    ]


def load(source: str) -> dict:
    namespace = {}
    exec(compile(source, "<generated>", "exec"), namespace)
    return namespace


def test_naming_helpers():
    assert snake_case("ProductResourceLinker") == "product_resource_linker"
    assert snake_case("HTTPResource") == "http_resource"
    assert constant_name("productId") == "PRODUCT_ID"
    assert constant_name("2fa") == "_2FA"


def test_constant_names_are_distinct():
    assert constant_names(["productId", "product_id", "PRODUCT_ID_2", "lang"]) == [
        "PRODUCT_ID", "PRODUCT_ID_2", "PRODUCT_ID_2_2", "LANG",
    ]


def test_linker_method_names():
    mappings = product_mappings() + [
        make_mapping("shop.ProductResource", "otherBrand", "/product/{id}/other",
                     target="shop.BrandResource", params=[("int", "id")]),
    ]
    
    assert linker_method_names(mappings) == [
        "self_link",
        "related_brand_resource",
        "related_brand_resource_other_brand",
    ]


class TestPythonSourceEmitter:
    """Test rendering and writing of generated modules."""
    
    def setup_method(self):
        self.emitter = PythonSourceEmitter("unused")
    
    def test_generated_linker_builds_urls(self):
        source = self.emitter.render_linker(PRODUCT.append("Linker"), product_mappings())
        linker = load(source)["ProductResourceLinker"]
        
        assert linker.self_link().replace("id", 3).value() == "/product/3"
        brand = linker.related_brand_resource().replace("id", 3).append_query("lang", "en")
        assert brand.value() == "/product/3/brand?lang=en"
    
    def test_generated_path_parameters_enum(self):
        request = descriptor_requests(PRODUCT, product_mappings())[0]
        enum = load(self.emitter.render_path_parameters(request))["ProductResourcePathParameters"]
        
        assert [member.name for member in enum] == ["ID"]
        assert enum.ID.placeholder == "id"
        assert enum.ID.regex.pattern == "[0-9]+"
    
    def test_generated_query_parameters_enum(self):
        request = descriptor_requests(PRODUCT, product_mappings())[1]
        enum = load(self.emitter.render_query_parameters(request))["ProductResourceQueryParameters"]
        
        assert enum.LANG.placeholder == "lang"
    
    def test_files_follow_package_layout(self, tmp_path):
        emitter = PythonSourceEmitter(tmp_path)
        
        path = emitter.emit_linker(PRODUCT.append("Linker"), product_mappings())
        
        assert path == tmp_path / "shop" / "product_resource_linker.py"
        assert "class ProductResourceLinker:" in path.read_text(encoding="utf-8")


def test_recording_emitter():
    emitter = RecordingEmitter()
    mappings = product_mappings()
    
    emitter.emit_linker(PRODUCT.append("Linker"), mappings)
    for request in descriptor_requests(PRODUCT, mappings):
        if request.kind == "path":
            emitter.emit_path_parameters(request)
        else:
            emitter.emit_query_parameters(request)
    
    assert emitter.linkers == {ClassName("shop.ProductResourceLinker"): tuple(mappings)}
    assert list(emitter.path_descriptors) == [ClassName("shop.ProductResourcePathParameters")]
    assert list(emitter.query_descriptors) == [ClassName("shop.ProductResourceQueryParameters")]


def test_clashing_parameter_names_get_distinct_members():
    emitter = PythonSourceEmitter("unused")
    mappings = [
        make_mapping("shop.ProductResource", "getById", "/product/{productId}/{product_id}",
                     params=[("int", "productId"), ("str", "product_id")],
                     queries=["sortBy", "sort_by"]),
    ]
    path_request, query_request = descriptor_requests(PRODUCT, mappings)
    
    path_enum = load(emitter.render_path_parameters(path_request))["ProductResourcePathParameters"]
    query_enum = load(emitter.render_query_parameters(query_request))["ProductResourceQueryParameters"]
    
    assert [m.placeholder for m in path_enum] == ["productId", "product_id"]
    assert path_enum.PRODUCT_ID_2.placeholder == "product_id"
    assert [m.placeholder for m in query_enum] == ["sortBy", "sort_by"]
