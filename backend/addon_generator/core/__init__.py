"""
Core Packaging Components

These components form the packaging pipeline, leaves first:
1. Normalizer - Free-text behavior names → canonical ids
2. Assemblers - Definitions → entity/item/block records
3. Pack Assembler - Accumulates both packs and their manifests
4. Validator - Pre-build consistency checks
5. Archive - File trees → zip archives
6. Builder - Fluent API and build()
"""
from .normalizer import VALID_BEHAVIORS, BEHAVIOR_ALIASES, normalize_behavior
from .entity_assembler import assemble_entity
from .item_assembler import assemble_item
from .block_assembler import assemble_block
from .pack_assembler import (
    PackAssembler,
    PackStateError,
    ScriptingNotEnabledError,
    ScriptingAlreadyEnabledError,
    ArtifactError,
    InvalidArtifactError,
    DuplicateArtifactError,
)
from .validator import Validator, ValidationError, ValidationIssue
from .archive import ArchiveError
from .builder import AddonBuilder, BatchReport, BatchFailure

__all__ = [
    "VALID_BEHAVIORS",
    "BEHAVIOR_ALIASES",
    "normalize_behavior",
    "assemble_entity",
    "assemble_item",
    "assemble_block",
    "PackAssembler",
    "PackStateError",
    "ScriptingNotEnabledError",
    "ScriptingAlreadyEnabledError",
    "ArtifactError",
    "InvalidArtifactError",
    "DuplicateArtifactError",
    "Validator",
    "ValidationError",
    "ValidationIssue",
    "ArchiveError",
    "AddonBuilder",
    "BatchReport",
    "BatchFailure",
]
