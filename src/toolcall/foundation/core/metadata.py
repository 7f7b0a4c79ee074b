"""Structured function documentation and its prompt rendering.

Metadata is produced outside the core (hand-written, loaded from JSON, or
emitted by a documentation extractor). The core only renders it into the
text block the model sees for each tool.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ParamDoc(BaseModel):
    """Documentation for one parameter."""
    model_config = ConfigDict(frozen=True)

    name: str
    desc: str = ""


class ReturnDoc(BaseModel):
    """Documentation for one return value."""
    model_config = ConfigDict(frozen=True)

    type: str
    description: str = ""


class ConstraintDoc(BaseModel):
    """A precondition on the function or its parameters."""
    model_config = ConfigDict(frozen=True)

    condition: str
    desc: str = ""


class FunctionMetadata(BaseModel):
    """Structured documentation for a callable tool.

    Example:
        >>> meta = FunctionMetadata(
        ...     function_name="divide",
        ...     description="Returns the quotient of two numbers.",
        ...     params=[ParamDoc(name="a", desc="The dividend."), ParamDoc(name="b", desc="The divisor.")],
        ...     constraints=[ConstraintDoc(condition="b != 0", desc="b must not be zero.")],
        ...     examples=["divide(10, 2) # returns 5"],
        ... )
        >>> print(meta.render())
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    function_name: str = ""
    description: str = ""
    params: list[ParamDoc] = Field(default_factory=list)
    returns: list[ReturnDoc] = Field(default_factory=list, alias="return")
    examples: list[str] = Field(default_factory=list)
    constraints: list[ConstraintDoc] = Field(default_factory=list)

    def to_json(self) -> str:
        """Indented JSON using the wire field names (``return`` rather than ``returns``)."""
        return self.model_dump_json(indent=2, by_alias=True)

    def render(self, name: str | None = None) -> str:
        """Human-readable block for the model prompt. Empty sections are omitted."""
        lines = [f"Function: {name or self.function_name}", f"Description: {self.description}"]
        if self.params:
            lines.append("Parameters:")
            lines += [f"  - {p.name}: {p.desc}" for p in self.params]
        if self.returns:
            lines.append("Returns:")
            lines += [f"  - {r.type}: {r.description}" for r in self.returns]
        if self.constraints:
            lines.append("Constraints:")
            lines += [f"  - {c.condition}: {c.desc}" for c in self.constraints]
        if self.examples:
            lines.append("Examples:")
            lines += [f"  - {e}" for e in self.examples]
        return "\n".join(lines) + "\n"
