"""Tests for the resource graph."""

from src.resource_linker.graph import ResourceGraph
from src.resource_linker.models import ClassName

from builders import make_mapping


PRODUCT = ClassName("shop.Product")
BRAND = ClassName("shop.Brand")


class TestResourceGraph:
    """Test accumulation of mappings across rounds."""
    
    def setup_method(self):
        self.graph = ResourceGraph()
        self.self_link = make_mapping("shop.Product", "getById", "/product/{id}", params=[("int", "id")])
        self.brand_link = make_mapping("shop.Product", "getBrandByProductId", "/product/{id}/brand",
                                       target="shop.Brand", params=[("int", "id")])
    
    def test_mappings_keep_insertion_order(self):
        self.graph.add_round([self.brand_link, self.self_link])
        
        assert self.graph.mappings_for(PRODUCT) == [self.brand_link, self.self_link]
    
    def test_relational_target_is_not_a_key(self):
        self.graph.add_round([self.self_link, self.brand_link])
        
        assert PRODUCT in self.graph
        assert BRAND not in self.graph
        assert self.graph.classes() == [PRODUCT]
        assert self.graph.referenced_classes() == [BRAND]
        assert self.graph.mappings_for(BRAND) == []
    
    def test_later_rounds_append(self):
        brand_self = make_mapping("shop.Brand", "get", "/brand/{id}", params=[("int", "id")])
        self.graph.add_round([self.brand_link])
        self.graph.add_round([brand_self, self.self_link])
        
        assert BRAND in self.graph
        assert self.graph.classes() == [PRODUCT, BRAND]
        assert self.graph.mappings_for(PRODUCT) == [self.brand_link, self.self_link]
    
    def test_relational_mappings_are_edges(self):
        self.graph.add_round([self.self_link, self.brand_link])
        
        edges = list(self.graph.graph.edges(keys=True, data=True))
        assert len(edges) == 1
        source, target, key, data = edges[0]
        assert (source, target, key) == (PRODUCT, BRAND, "getBrandByProductId")
        assert data["type"] == "SUB_RESOURCE"
        assert data["data"] is self.brand_link
    
    def test_snapshot_and_statistics(self):
        self.graph.add_round([self.self_link, self.brand_link])
        
        assert self.graph.snapshot() == {PRODUCT: [self.self_link, self.brand_link]}
        assert self.graph.statistics() == {
            "total_classes": 1,
            "total_mappings": 2,
            "self_mappings": 1,
            "relational_mappings": 1,
            "unreachable_targets": 1,
        }
    
    def test_snapshot_is_a_copy(self):
        self.graph.add(self.self_link)
        
        snapshot = self.graph.snapshot()
        snapshot[PRODUCT].append(self.brand_link)
        
        assert self.graph.mappings_for(PRODUCT) == [self.self_link]
