"""Pydantic models for the component manifest.

A manifest maps component names to the filesystem path prefixes they own.
It is read-only configuration: loaded once per analysis run and passed
explicitly into every ownership lookup.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Component(BaseModel):
    """Named logical unit of a codebase.

    Example:
        >>> auth = Component(name="auth", paths=["/project/src/auth"], deps=["db"])
        >>> Component(name="api", path="/project/src/api").paths
        ['/project/src/api']
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        ...,
        min_length=1,
        description="Unique component name",
    )
    paths: list[str] = Field(
        ...,
        min_length=1,
        description="Filesystem path prefixes owned by the component",
    )
    deps: list[str] = Field(
        default_factory=list,
        description="Names of components this component statically depends on",
    )
    docs: list[str] = Field(
        default_factory=list,
        description="Documentation references",
    )

    @model_validator(mode="before")
    @classmethod
    def accept_single_path(cls, data: Any) -> Any:
        """Allow ``path: str`` as shorthand for a one-element ``paths`` list."""
        if isinstance(data, dict) and "path" in data and "paths" not in data:
            data = dict(data)
            path = data.pop("path")
            data["paths"] = [path] if isinstance(path, str) else path
        return data

    @field_validator("paths")
    @classmethod
    def validate_paths(cls, v: list[str]) -> list[str]:
        """Reject blank path prefixes."""
        if any(not p.strip() for p in v):
            raise ValueError("component path prefixes must be non-empty")
        return v


class Manifest(BaseModel):
    """Mapping from component name to Component.

    Relative path prefixes are resolved against ``root``, or against the
    current working directory when ``root`` is unset.
    """

    model_config = ConfigDict(frozen=True)

    version: str = Field(
        default="0.1.0",
        description="Manifest format version",
    )
    root: str | None = Field(
        default=None,
        description="Base directory for relative path prefixes",
    )
    components: dict[str, Component] = Field(
        default_factory=dict,
        description="Components keyed by name",
    )

    @model_validator(mode="before")
    @classmethod
    def fill_component_names(cls, data: Any) -> Any:
        """Let component entries omit ``name`` when keyed by it."""
        if not isinstance(data, dict):
            return data
        components = data.get("components")
        if isinstance(components, dict):
            filled = {}
            for key, value in components.items():
                if isinstance(value, dict) and "name" not in value:
                    value = {**value, "name": key}
                filled[key] = value
            data = {**data, "components": filled}
        return data

    @model_validator(mode="after")
    def check_keys_match_names(self) -> "Manifest":
        """Ensure every component is keyed by its own name."""
        for key, component in self.components.items():
            if key != component.name:
                raise ValueError(
                    f"component keyed as '{key}' declares name '{component.name}'"
                )
        return self

    @property
    def component_names(self) -> list[str]:
        """Component names in sorted order."""
        return sorted(self.components)

    @classmethod
    def from_components(
        cls,
        components: list[Component],
        root: str | None = None,
    ) -> "Manifest":
        """Build a manifest from a component list.

        Raises:
            ValueError: If two components share a name.
        """
        by_name: dict[str, Component] = {}
        for component in components:
            if component.name in by_name:
                raise ValueError(f"Duplicate component name: {component.name}")
            by_name[component.name] = component
        return cls(root=root, components=by_name)
