"""Models for the registry.json document published by a source repository."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from agent_cli.errors import UnknownCategory
from agent_cli.paths import validate_relative_path

CategoryType = Literal["skill", "agent"]


def _validate_path_segment(value: str, what: str) -> str:
    if not value or value in (".", "..") or "/" in value or "\\" in value:
        msg = f"{what} must be a single path segment: {value!r}"
        raise ValueError(msg)
    return value


class RegistryCategory(BaseModel):
    """One category of the registry: a folder of skills or agent instructions.

    The key -> folder map is published under the JSON key "skills" for
    every category type; "entries" is accepted as well.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    description: str
    path: str  # Relative to the snapshot root
    type: CategoryType = "skill"
    entries: dict[str, str] = Field(alias="skills")
    prompts_path: str | None = Field(default=None, alias="promptsPath")
    prompts: dict[str, str] = Field(default_factory=dict)

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Validate the category folder stays inside the snapshot."""
        return validate_relative_path(v, "category path")

    @field_validator("prompts_path")
    @classmethod
    def validate_prompts_path(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return validate_relative_path(v, "promptsPath")

    @field_validator("entries")
    @classmethod
    def validate_entries(cls, v: dict[str, str]) -> dict[str, str]:
        """Validate keys and folder names are plain path segments."""
        for key, folder in v.items():
            _validate_path_segment(key, "entry key")
            _validate_path_segment(folder, "folder name")
        return v

    @field_validator("prompts")
    @classmethod
    def validate_prompts(cls, v: dict[str, str]) -> dict[str, str]:
        """Validate prompt filenames are plain path segments."""
        for key, filename in v.items():
            _validate_path_segment(key, "prompt key")
            _validate_path_segment(filename, "prompt filename")
        return v


class Registry(BaseModel):
    """The registry document: categories plus named presets.

    Loaded fresh from a source snapshot by every command that needs it and
    never mutated locally.
    """

    model_config = ConfigDict(frozen=True)

    version: str
    categories: dict[str, RegistryCategory]
    presets: dict[str, list[str]] = Field(default_factory=dict)

    @field_validator("categories")
    @classmethod
    def validate_category_ids(
        cls, v: dict[str, RegistryCategory]
    ) -> dict[str, RegistryCategory]:
        """Validate category ids can be used in selectors."""
        for category_id in v:
            _validate_path_segment(category_id, "category id")
            if "*" in category_id:
                msg = f"category id cannot contain '*': {category_id!r}"
                raise ValueError(msg)
        return v

    def resolve_category(self, category_id: str) -> RegistryCategory:
        """Return the category with the given id.

        Raises:
            UnknownCategory: If the registry has no such category
        """
        if category_id not in self.categories:
            raise UnknownCategory(category_id)
        return self.categories[category_id]

    def list_all_selectors(self) -> list[str]:
        """List every concrete "category/key" selector in declared order."""
        return [
            f"{category_id}/{key}"
            for category_id, category in self.categories.items()
            for key in category.entries
        ]

    def skill_folder_names(self) -> set[str]:
        """Folder names of every skill-typed entry, across all categories."""
        return {
            folder
            for category in self.categories.values()
            if category.type == "skill"
            for folder in category.entries.values()
        }
