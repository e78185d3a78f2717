"""Models for the project-local files: the .agent.json manifest and install state."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from agent_cli.paths import validate_relative_path


class Manifest(BaseModel):
    """Declarative project state stored in .agent.json.

    The order of `include` is significant: it is the composition order of
    agent-typed entries.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    source: str  # e.g. "github:user/repo"
    ref: str  # Tag, branch or SHA
    output_dir: str = Field(alias="outputDir")
    include: list[str] = Field(default_factory=list)
    agent_output: str | None = Field(default=None, alias="agentOutput")

    @field_validator("output_dir")
    @classmethod
    def validate_output_dir(cls, v: str) -> str:
        """Validate the output directory stays inside the project."""
        return validate_relative_path(v, "outputDir")

    @field_validator("agent_output")
    @classmethod
    def validate_agent_output(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return validate_relative_path(v, "agentOutput")

    def with_include(self, include: list[str]) -> "Manifest":
        """Return a copy with a new include list."""
        return self.model_copy(update={"include": list(include)})

    def with_ref(self, ref: str) -> "Manifest":
        """Return a copy pinned to another ref."""
        return self.model_copy(update={"ref": ref})

    def to_json_dict(self) -> dict[str, object]:
        """Serialize with camelCase keys, omitting unset optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


class InstallState(BaseModel):
    """Record of the last successful install, stored in .agent-state.json.

    `files` lists every project-relative path the install wrote. It is the
    explicit ownership record that allows removals without touching user
    files.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    resolved_ref: str = Field(alias="resolvedRef")
    format: str = "plain"
    files: list[str] = Field(default_factory=list)
