"""
Manifest Schema - per-pack identity file (manifest.json)

One ManifestRecord exists per pack. It is created once when the builder is
constructed; only enable_scripting mutates it afterwards.
"""
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field


class ManifestHeader(BaseModel):
    name: str = Field(...)
    description: str = Field(...)
    uuid: str = Field(...)
    version: List[int] = Field(..., min_length=3, max_length=3)
    min_engine_version: List[int] = Field(..., min_length=3, max_length=3)


class ManifestModule(BaseModel):
    type: Literal["data", "resources", "script"] = Field(...)
    uuid: str = Field(...)
    version: List[int] = Field(..., min_length=3, max_length=3)
    language: Optional[str] = Field(None, description="Script modules only")
    entry: Optional[str] = Field(None, description="Script modules only")


class ManifestDependency(BaseModel):
    """Either a sibling pack (uuid) or an engine script module (module_name)"""
    uuid: Optional[str] = Field(None)
    module_name: Optional[str] = Field(None)
    version: Union[List[int], str] = Field(...)


class ManifestMetadata(BaseModel):
    authors: List[str] = Field(default_factory=list)
    generated_with: Dict[str, List[str]] = Field(default_factory=dict)


class ManifestRecord(BaseModel):
    format_version: int = Field(2)
    header: ManifestHeader = Field(...)
    modules: List[ManifestModule] = Field(default_factory=list)
    dependencies: Optional[List[ManifestDependency]] = Field(None)
    metadata: Optional[ManifestMetadata] = Field(None)

    def to_json_dict(self) -> Dict[str, Any]:
        """Manifest JSON without keys for absent optional fields."""
        return self.model_dump(exclude_none=True)


__all__ = [
    "ManifestHeader",
    "ManifestModule",
    "ManifestDependency",
    "ManifestMetadata",
    "ManifestRecord",
]
