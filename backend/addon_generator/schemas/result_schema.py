"""
Build result returned by AddonBuilder.build()
"""
from pydantic import BaseModel, ConfigDict, Field


class BuildMetadata(BaseModel):
    """Summary of a finished build"""
    model_config = ConfigDict(frozen=True)

    name: str
    namespace: str
    version: str
    behavior_uuid: str
    resource_uuid: str
    entity_count: int = Field(..., ge=0)
    item_count: int = Field(..., ge=0)
    block_count: int = Field(..., ge=0)


class BuildResult(BaseModel):
    """
    The three archives of one build.

    Immutable once created. Encoding and delivery are the caller's job.
    """
    model_config = ConfigDict(frozen=True)

    behavior_pack: bytes = Field(..., description="Behavior pack archive (.mcpack)")
    resource_pack: bytes = Field(..., description="Resource pack archive (.mcpack)")
    mcaddon: bytes = Field(..., description="Combined installable archive (.mcaddon)")
    metadata: BuildMetadata


__all__ = ["BuildMetadata", "BuildResult"]
