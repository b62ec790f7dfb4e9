"""Configuration management for Class Atlas."""

from __future__ import annotations

import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict, TomlConfigSettingsSource

from class_atlas.errors import ConfigurationError

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")

# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------


def _find_atlas_toml() -> Path | None:
    """Walk up from cwd looking for ``class-atlas.toml``."""
    current = Path.cwd().resolve()
    while True:
        candidate = current / "class-atlas.toml"
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            return None
        current = parent


def _spellings(field_name: str) -> tuple[str, str, str]:
    head, *rest = field_name.split("_")
    return field_name, field_name.replace("_", "-"), head + "".join(part.capitalize() for part in rest)


def normalize_option_name(name: str) -> str:
    """Map ``only-self`` / ``onlySelf`` / ``only_self`` to the field name ``only_self``.

    Any other spelling, such as ``ONLY_SELF``, is returned unchanged.
    """
    field_name = _CAMEL_BOUNDARY.sub("_", name).replace("-", "_").lower()
    return field_name if name in _spellings(field_name) else name


# ---------------------------------------------------------------------------
# Diagram options
# ---------------------------------------------------------------------------


class DiagramOptions(BaseModel):
    """Immutable switches controlling what a class diagram shows."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    only_self: bool = Field(
        default=True, description="Only show members declared by the type itself, not those inherited."
    )
    show_private: bool = Field(default=False, description="Also show private properties and methods.")
    show_protected: bool = Field(default=True, description="Also show protected properties and methods.")
    show_constants: bool = Field(default=True, description="Show constants as read-only static attributes.")
    add_parents: bool = Field(default=True, description="Add parent classes and interfaces to the diagram.")

    def with_option(self, name: str, flag: object) -> DiagramOptions:
        """Return a copy with option *name* set to ``bool(flag)``.

        Raises :class:`ConfigurationError` for names outside the known set.
        """
        field_name = normalize_option_name(name)
        if field_name not in type(self).model_fields:
            raise ConfigurationError(name)
        return self.model_copy(update={field_name: bool(flag)})


class RenderSettings(BaseSettings):
    """Graphviz rendering settings."""

    dot_binary: str = Field(default="dot", description="Graphviz executable used to render diagrams.")
    output_format: str = Field(default="svg", description="Default output format passed to ``dot -T``.")
    timeout_s: float = Field(default=30.0, description="Timeout in seconds for a single Graphviz run.")
    graph_name: str = Field(default="G", description="Name of the emitted digraph.")


class AtlasSettings(BaseSettings):
    """Root configuration for Class Atlas."""

    model_config = SettingsConfigDict(
        toml_file="class-atlas.toml",
        env_prefix="CLASS_ATLAS_",
        env_nested_delimiter="__",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        toml_path = _find_atlas_toml()
        sources: list[PydanticBaseSettingsSource] = [init_settings, env_settings]
        if toml_path:
            sources.append(TomlConfigSettingsSource(settings_cls, toml_file=toml_path))
        sources.append(file_secret_settings)
        return tuple(sources)

    options: DiagramOptions = Field(default_factory=DiagramOptions)
    render: RenderSettings = Field(default_factory=RenderSettings)
