"""
Pydantic schemas shared by the FastAPI endpoints.
"""
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from config import DEFAULT_ADDON_VERSION, DEFAULT_MIN_ENGINE_VERSION

NAMESPACE_PATTERN = r"^[a-z][a-z0-9_]*$"


class LootTablePayload(BaseModel):
    """Loot table file placed at `path` inside the behavior pack."""

    path: str = Field(..., min_length=1, description="e.g. loot_tables/chests/treasure.json")
    content: Dict[str, Any]


class ScriptModulePayload(BaseModel):
    name: str = Field(..., min_length=1)
    content: str


class ScriptsPayload(BaseModel):
    main: Optional[str] = Field(default=None, description="Entry script (scripts/main.js).")
    modules: List[ScriptModulePayload] = Field(default_factory=list)


class TextureFilePayload(BaseModel):
    path: str = Field(..., min_length=1, description="e.g. textures/items/ruby.png")
    data: str = Field(..., description="Base64-encoded PNG.")


class GenerateAddonRequest(BaseModel):
    """Incoming payload for building an addon from definitions."""

    name: str = Field(..., min_length=1, max_length=100, description="Addon display name.")
    namespace: str = Field(
        ...,
        pattern=NAMESPACE_PATTERN,
        description="Lowercase letters, numbers and underscores; must start with a letter.",
    )
    description: Optional[str] = None
    version: str = Field(default=DEFAULT_ADDON_VERSION)
    minEngineVersion: str = Field(default=DEFAULT_MIN_ENGINE_VERSION)
    authors: Optional[List[str]] = None
    packIcon: Optional[str] = Field(default=None, description="Base64-encoded PNG pack icon.")
    entities: List[Dict[str, Any]] = Field(default_factory=list)
    items: List[Dict[str, Any]] = Field(default_factory=list)
    blocks: List[Dict[str, Any]] = Field(default_factory=list)
    recipes: List[Dict[str, Any]] = Field(default_factory=list)
    lootTables: List[LootTablePayload] = Field(default_factory=list)
    spawnRules: List[Dict[str, Any]] = Field(default_factory=list)
    animations: List[Dict[str, Any]] = Field(default_factory=list)
    textures: List[TextureFilePayload] = Field(default_factory=list)
    soundDefinitions: Optional[Dict[str, Any]] = None
    scripts: Optional[ScriptsPayload] = None
    enableScripting: bool = False


class Download(BaseModel):
    filename: str
    data: str = Field(..., description="Base64-encoded archive.")
    mimeType: str = "application/octet-stream"


class AddonMetadata(BaseModel):
    name: str
    namespace: str
    version: str
    behaviorUUID: str
    resourceUUID: str
    entityCount: int
    itemCount: int
    blockCount: int


class GenerateAddonResponse(BaseModel):
    success: bool = True
    addonId: str
    requestId: str
    downloads: Dict[str, Download]
    metadata: AddonMetadata


class ArtifactFailure(BaseModel):
    """One artifact that could not be added."""

    kind: str
    index: Optional[int] = None
    identifier: Optional[str] = None
    message: str


class ErrorResponse(BaseModel):
    """Error body returned by every endpoint."""

    error: str
    details: Optional[Any] = None
    requestId: str
    errorType: str
    failures: Optional[List[ArtifactFailure]] = None
    issues: Optional[List[Dict[str, Any]]] = None


class ConceptRequest(BaseModel):
    """Natural-language idea to expand."""

    concept: str = Field(..., description="5-5000 characters.")
    conceptType: Literal["auto", "entity", "item", "block"] = "auto"
    language: str = Field(default="en", min_length=2, max_length=10)
    namespace: Optional[str] = Field(
        default=None,
        pattern=NAMESPACE_PATTERN,
        description="Qualifies bare identifiers in the converted definitions.",
    )


class ConceptResponse(BaseModel):
    success: bool = True
    generationId: str
    requestId: str
    concept: Dict[str, Any]
    definitions: Dict[str, Any]
    metadata: Dict[str, Any]
