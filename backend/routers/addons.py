"""
Addons Router
Builds an installable addon from entity/item/block definitions
"""
import base64
import logging
import uuid
from typing import Any, Callable, List

from fastapi import APIRouter, status
from pydantic import ValidationError as SchemaValidationError

from addon_generator.core import (
    AddonBuilder,
    ArchiveError,
    ArtifactError,
    BatchReport,
    InvalidArtifactError,
    ValidationError,
)
from models import (
    AddonMetadata,
    ArtifactFailure,
    Download,
    ErrorResponse,
    GenerateAddonRequest,
    GenerateAddonResponse,
)
from routers.common import error_response, new_request_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/generate", tags=["generate"])


def _batch_failures(report: BatchReport) -> List[ArtifactFailure]:
    return [ArtifactFailure(**failure.model_dump()) for failure in report.failures]


def _add_each(kind: str, payloads: List[Any], add: Callable[[Any], Any]) -> List[ArtifactFailure]:
    """Add artifacts one by one, collecting failures instead of stopping"""
    failures = []
    for index, payload in enumerate(payloads):
        try:
            add(payload)
        except ArtifactError as e:
            failures.append(ArtifactFailure(kind=kind, index=index, identifier=e.identifier, message=e.message))
    return failures


def _populate(builder: AddonBuilder, request: GenerateAddonRequest, request_id: str) -> List[ArtifactFailure]:
    failures: List[ArtifactFailure] = []

    if request.enableScripting:
        logger.info(f"[API:addon][{request_id}] Enabling scripting...")
        builder.enable_scripting()

    failures += _batch_failures(builder.add_entities(request.entities))
    failures += _batch_failures(builder.add_items(request.items))
    failures += _batch_failures(builder.add_blocks(request.blocks))

    failures += _add_each("recipe", request.recipes, builder.add_recipe)
    failures += _add_each(
        "loot_table", request.lootTables, lambda lt: builder.add_loot_table(lt.path, lt.content)
    )
    failures += _add_each("spawn_rules", request.spawnRules, builder.add_spawn_rules)
    failures += _add_each("animation", request.animations, builder.add_animation)
    failures += _add_each(
        "texture", request.textures, lambda tf: builder.add_texture_file(tf.path, tf.data)
    )
    if request.soundDefinitions:
        failures += _add_each("sound_definitions", [request.soundDefinitions], builder.add_sound_definitions)

    if request.scripts and request.enableScripting:
        logger.info(f"[API:addon][{request_id}] Adding scripts...")
        if request.scripts.main:
            failures += _add_each("script", [request.scripts.main], lambda main: builder.add_script("main", main))
        failures += _add_each(
            "script", request.scripts.modules, lambda module: builder.add_script(module.name, module.content)
        )
    elif request.scripts:
        logger.warning(f"[API:addon][{request_id}] Scripts ignored: enableScripting is false")

    return failures


@router.post(
    "/addon",
    response_model=GenerateAddonResponse,
    responses={
        422: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
def generate_addon(request: GenerateAddonRequest):
    """
    Generate a Minecraft Bedrock addon

    Every artifact is added independently. If any fails, the response is a
    422 listing each failure (kind, index, identifier, message) and no
    archive is built.
    """
    request_id = new_request_id()
    logger.info(
        f"[API:addon][{request_id}] Request: name={request.name} namespace={request.namespace} "
        f"entities={len(request.entities)} items={len(request.items)} blocks={len(request.blocks)} "
        f"recipes={len(request.recipes)} scripting={request.enableScripting}"
    )

    try:
        builder = AddonBuilder({
            "name": request.name,
            "namespace": request.namespace,
            "description": request.description,
            "version": request.version,
            "min_engine_version": request.minEngineVersion,
            "authors": request.authors,
            "pack_icon": request.packIcon,
        })
    except (SchemaValidationError, InvalidArtifactError) as e:
        logger.error(f"[API:addon][{request_id}] Invalid addon config: {e}")
        return error_response(
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            "Invalid addon configuration",
            request_id,
            type(e).__name__,
            details=str(e),
        )

    failures = _populate(builder, request, request_id)
    if failures:
        logger.error(f"[API:addon][{request_id}] {len(failures)} artifacts failed")
        return error_response(
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            "One or more artifacts could not be added",
            request_id,
            "ArtifactError",
            details=f"{len(failures)} failed artifacts",
            failures=failures,
        )

    try:
        result = builder.build()
    except ValidationError as e:
        logger.error(f"[API:addon][{request_id}] Validation failed: {e}")
        return error_response(
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            "Addon validation failed",
            request_id,
            type(e).__name__,
            details=str(e),
            issues=[issue.to_dict() for issue in e.issues],
        )
    except ArchiveError as e:
        logger.error(f"[API:addon][{request_id}] Archive error: {e}", exc_info=True)
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to generate addon",
            request_id,
            type(e).__name__,
            details=str(e),
        )

    metadata = result.metadata
    logger.info(
        f"[API:addon][{request_id}] Build complete: {metadata.entity_count} entities, "
        f"{metadata.item_count} items, {metadata.block_count} blocks"
    )

    return GenerateAddonResponse(
        addonId=uuid.uuid4().hex,
        requestId=request_id,
        downloads={
            "mcaddon": Download(
                filename=f"{request.name}.mcaddon",
                data=base64.b64encode(result.mcaddon).decode("ascii"),
            ),
            "behaviorPack": Download(
                filename=f"{request.name}_BP.mcpack",
                data=base64.b64encode(result.behavior_pack).decode("ascii"),
            ),
            "resourcePack": Download(
                filename=f"{request.name}_RP.mcpack",
                data=base64.b64encode(result.resource_pack).decode("ascii"),
            ),
        },
        metadata=AddonMetadata(
            name=metadata.name,
            namespace=metadata.namespace,
            version=metadata.version,
            behaviorUUID=metadata.behavior_uuid,
            resourceUUID=metadata.resource_uuid,
            entityCount=metadata.entity_count,
            itemCount=metadata.item_count,
            blockCount=metadata.block_count,
        ),
    )
