"""
Concepts Router
Expands a natural-language idea into an addon concept and builder definitions
"""
import logging
import time
import uuid

from fastapi import APIRouter, Depends, status

from config import AIConfig
from addon_generator.ai import ConceptError, ConceptExpander
from models import ConceptRequest, ConceptResponse, ErrorResponse
from routers.common import error_response, new_request_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/generate", tags=["generate"])


def get_concept_expander() -> ConceptExpander:
    """
    Build the expander from the environment

    Raises:
        ConfigError: If GEMINI_API_KEY is missing (mapped to 503 in main)
    """
    return ConceptExpander(AIConfig.from_env())


@router.post(
    "/ai-concept",
    response_model=ConceptResponse,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
def expand_concept(
    request: ConceptRequest,
    expander: ConceptExpander = Depends(get_concept_expander),
):
    """
    Expand a concept and convert it into builder definitions

    The returned definitions can be posted to /api/generate/addon as-is.
    """
    request_id = new_request_id()
    logger.info(
        f"[API:ai-concept][{request_id}] Input: \"{request.concept[:100]}\" "
        f"({request.conceptType}, {request.language})"
    )

    start_time = time.time()
    try:
        expanded = expander.expand(request.concept, request.conceptType, request.language)
    except ConceptError as e:
        logger.error(f"[API:ai-concept][{request_id}] Concept error: {e}")
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            "Invalid concept",
            request_id,
            type(e).__name__,
            details=str(e),
        )
    except Exception as e:
        logger.error(f"[API:ai-concept][{request_id}] AI generation error: {e}", exc_info=True)
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "AI generation failed",
            request_id,
            type(e).__name__,
            details=str(e),
        )

    definitions = expander.to_definitions(expanded, request.namespace)
    generation_time_ms = int((time.time() - start_time) * 1000)
    logger.info(f"[API:ai-concept][{request_id}] Complete in {generation_time_ms}ms ({expanded.concept_type})")

    return ConceptResponse(
        generationId=uuid.uuid4().hex,
        requestId=request_id,
        concept=expanded.model_dump(by_alias=True, exclude_none=True),
        definitions=definitions.model_dump(),
        metadata={"generationTimeMs": generation_time_ms, **expander.describe()},
    )
