"""Specification models for a generated plugin.

A Specification is the fully resolved description of one plugin: naming,
stylesheet location, distribution version and the ordered parameter list.
It is built once per run and handed to the renderer; both models are frozen.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Parameter(BaseModel):
    """A global stylesheet parameter exposed by the generated plugin."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    description: str = Field(
        default="", description="Single-line, sentence-terminated summary"
    )

    @field_validator("description")
    @classmethod
    def single_line(cls, v: str) -> str:
        if "\n" in v or "\r" in v:
            raise ValueError("description must be a single line")
        return v


class Specification(BaseModel):
    """Everything the template needs to render one plugin source file."""

    model_config = ConfigDict(frozen=True)

    output_type: str = Field(description="Output format, e.g. 'html' or 'fo'")
    stylesheet_location: str = Field(
        description="Path of the stylesheet once staged, e.g. META-INF/docbkx/html/docbook.xsl"
    )
    class_name: str
    package_name: str
    super_class_name: str | None = None
    plugin_suffix: str | None = None
    distribution_version: str
    parameters: tuple[Parameter, ...] = ()

    @field_validator("parameters")
    @classmethod
    def unique_names(cls, v: tuple[Parameter, ...]) -> tuple[Parameter, ...]:
        seen: set[str] = set()
        for param in v:
            if param.name in seen:
                raise ValueError(f"duplicate parameter name: {param.name}")
            seen.add(param.name)
        return v

    def parameter_names(self) -> list[str]:
        """Names of all parameters, in specification order."""
        return [p.name for p in self.parameters]

    def get_parameter(self, name: str) -> Parameter | None:
        """Get a parameter by name."""
        for param in self.parameters:
            if param.name == name:
                return param
        return None

    def summary(self) -> str:
        """Get a text summary of the specification."""
        described = sum(1 for p in self.parameters if p.description)
        return (
            f"{self.package_name}.{self.class_name} "
            f"({self.output_type}, docbook-xsl {self.distribution_version}): "
            f"{len(self.parameters)} parameters, {described} described"
        )
