"""
Schemas for the Addon Generator

These schemas define the contracts between stages:
- Definition: Caller / AI intent (lenient, mostly optional)
- IR: Resolved definitions (machine-ready)
- Manifest: Per-pack identity files
- Result: Build output
- Concept: Content-expansion service output
"""
from .definition_schema import (
    AddonConfig,
    EntityDefinition,
    HealthSpec,
    MovementSpec,
    AttackSpec,
    CollisionBoxSpec,
    BehaviorEntry,
    ItemDefinition,
    DurabilitySpec,
    FoodSpec,
    BlockDefinition,
)
from .ir_schema import IRBehavior, IREntity, IRItem, IRBlock
from .manifest_schema import (
    ManifestHeader,
    ManifestModule,
    ManifestDependency,
    ManifestMetadata,
    ManifestRecord,
)
from .result_schema import BuildMetadata, BuildResult
from .concept_schema import (
    ExpandedConcept,
    ExpandedEntityConcept,
    ExpandedItemConcept,
    ExpandedBlockConcept,
)

__all__ = [
    # Definitions (Caller Intent)
    "AddonConfig",
    "EntityDefinition",
    "HealthSpec",
    "MovementSpec",
    "AttackSpec",
    "CollisionBoxSpec",
    "BehaviorEntry",
    "ItemDefinition",
    "DurabilitySpec",
    "FoodSpec",
    "BlockDefinition",
    # IR (Resolved)
    "IRBehavior",
    "IREntity",
    "IRItem",
    "IRBlock",
    # Manifest
    "ManifestHeader",
    "ManifestModule",
    "ManifestDependency",
    "ManifestMetadata",
    "ManifestRecord",
    # Result
    "BuildMetadata",
    "BuildResult",
    # Concepts (AI Output)
    "ExpandedConcept",
    "ExpandedEntityConcept",
    "ExpandedItemConcept",
    "ExpandedBlockConcept",
]
