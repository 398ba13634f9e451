from typing import Any, Dict, Tuple, Type

from pydantic import BaseModel, ConfigDict, Field


class OptionAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(description="The name or a short summary of the option.")
    pros: Tuple[str, ...] = Field(description="Positive points of the option.")
    cons: Tuple[str, ...] = Field(description="Negative points of the option.")


class ComparisonResult(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    item_a: OptionAnalysis = Field(
        alias="itemA", description="Analysis of the first option."
    )
    item_b: OptionAnalysis = Field(
        alias="itemB", description="Analysis of the second option."
    )
    conclusion: str = Field(
        description=(
            "A balanced final conclusion that sums up the comparison and suggests "
            "which option may be better and in which context."
        )
    )


class ComparisonRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    option_a: str
    option_b: str


def response_schema(model: Type[BaseModel] = ComparisonResult) -> Dict[str, Any]:
    """
    Build the Gemini ``responseSchema`` from a pydantic model.

    Gemini takes an OpenAPI subset (upper-case type names, no $ref), so the
    JSON schema pydantic generates is inlined and renamed here. Deriving it
    keeps the requested shape and the record we parse into identical.
    """
    schema = model.model_json_schema(by_alias=True)
    return _to_gemini(schema, schema.get("$defs", {}))


def _to_gemini(node: Dict[str, Any], defs: Dict[str, Any]) -> Dict[str, Any]:
    if "$ref" in node or "allOf" in node:
        ref = node["$ref"] if "$ref" in node else node["allOf"][0]["$ref"]
        converted = _to_gemini(defs[ref.rsplit("/", 1)[-1]], defs)
        if "description" in node:
            converted["description"] = node["description"]
        return converted

    kind = node["type"]
    out: Dict[str, Any] = {"type": kind.upper()}
    if "description" in node:
        out["description"] = node["description"]

    if kind == "object":
        props = node.get("properties", {})
        out["properties"] = {name: _to_gemini(sub, defs) for name, sub in props.items()}
        out["required"] = list(props)
        out["propertyOrdering"] = list(props)
    elif kind == "array":
        out["items"] = _to_gemini(node["items"], defs)
    return out
