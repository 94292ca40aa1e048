"""JSON fact records exchanged with external fact extractors."""

import json
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .models import DeclaredParameter, MethodFact


class DeclaredParameterRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: str = Field(..., description="Semantic type name, e.g. int or string")
    name: str = Field(..., description="Parameter name as used in the path or query string")
    is_path_param: bool = Field(False, alias="isPathParam")
    pattern: Optional[str] = Field(None, description="Regex constraining accepted values")

    def to_model(self) -> DeclaredParameter:
        return DeclaredParameter(self.type, self.name, self.is_path_param, self.pattern)


class MethodFactRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    owner_class: str = Field(..., alias="ownerClass")
    method_name: str = Field(..., alias="methodName")
    http_verb: Optional[str] = Field(None, alias="httpVerb")
    raw_path_template: Optional[str] = Field(None, alias="rawPathTemplate")
    self_marker: bool = Field(False, alias="selfMarker")
    relational_marker: bool = Field(False, alias="relationalMarker")
    relational_target: Optional[str] = Field(None, alias="relationalTarget")
    declared_parameters: List[DeclaredParameterRecord] = Field(
        default_factory=list, alias="declaredParameters"
    )
    element_kind: str = Field("method", alias="elementKind")

    def to_model(self) -> MethodFact:
        return MethodFact(
            owner_class=self.owner_class,
            method_name=self.method_name,
            http_verb=self.http_verb,
            raw_path=self.raw_path_template,
            self_marker=self.self_marker,
            relational_marker=self.relational_marker,
            relational_target=self.relational_target,
            declared_parameters=[p.to_model() for p in self.declared_parameters],
            element_kind=self.element_kind,
        )


class FactRounds(BaseModel):
    rounds: List[List[MethodFactRecord]] = Field(default_factory=list)


def parse_facts(data) -> List[List[MethodFact]]:
    """
    Convert decoded JSON into rounds of facts.

    Accepts either a flat list of fact records (one round) or an object with
    a ``rounds`` list of lists.
    """
    if isinstance(data, list):
        data = {"rounds": [data]}
    rounds = FactRounds.model_validate(data)
    return [[record.to_model() for record in batch] for batch in rounds.rounds]


def load_facts(path) -> List[List[MethodFact]]:
    """Read fact rounds from a JSON file."""
    with open(Path(path), encoding="utf-8") as f:
        return parse_facts(json.load(f))
