"""
Concept Expander - Natural Language → ExpandedConcept

Responsibilities:
- Validate the user concept before any model call
- Run the expert prompt through Gemini and parse the JSON reply
- Validate the reply leniently into an ExpandedConcept

This is the ONLY place where an LLM interprets English. Its output is
never trusted: the converter and the assemblers default everything.
"""
import logging
import time
from typing import Any, Dict, Optional

from langchain_core.exceptions import OutputParserException
from langchain_core.language_models import BaseChatModel
from langchain_core.output_parsers import JsonOutputParser
from langchain_google_genai import ChatGoogleGenerativeAI

from config import AIConfig
from addon_generator.schemas import ExpandedConcept
from addon_generator.ai.prompts import (
    CONCEPT_TYPE_INSTRUCTIONS,
    EXPAND_PROMPT,
    JSON_CONTRACT,
    language_instruction,
)
from addon_generator.ai.converter import ConvertedDefinitions, to_definitions

logger = logging.getLogger(__name__)


MIN_CONCEPT_LENGTH = 5
MAX_CONCEPT_LENGTH = 5000
CONCEPT_TYPES = tuple(CONCEPT_TYPE_INSTRUCTIONS)


class ConceptError(Exception):
    """Raised when a concept cannot be expanded"""
    pass


def _build_llm(config: AIConfig) -> ChatGoogleGenerativeAI:
    return ChatGoogleGenerativeAI(
        google_api_key=config.require_api_key(),
        model=config.model,
        temperature=config.temperature,
        max_retries=config.max_retries,
        request_timeout=config.request_timeout,
        transport="rest",  # Use REST API instead of gRPC to avoid proxy issues
    )


class ConceptExpander:
    """
    ConceptExpander - expands a short idea into a detailed addon concept

    The model is injectable; tests pass a fake chat model.
    """

    def __init__(self, config: AIConfig, llm: Optional[BaseChatModel] = None):
        self.config = config
        self.llm = llm if llm is not None else _build_llm(config)
        self.parser = JsonOutputParser()
        self.chain = EXPAND_PROMPT | self.llm | self.parser

    @staticmethod
    def validate_concept(concept: Any) -> str:
        if not isinstance(concept, str):
            raise ConceptError("Concept must be text")
        if not MIN_CONCEPT_LENGTH <= len(concept) <= MAX_CONCEPT_LENGTH:
            raise ConceptError(
                f"Invalid concept length ({MIN_CONCEPT_LENGTH}-{MAX_CONCEPT_LENGTH} characters)"
            )
        return concept

    def expand(self, concept: str, concept_type: str = "auto", language: str = "en") -> ExpandedConcept:
        """
        Expand a user concept

        Args:
            concept: Natural-language idea (5-5000 characters)
            concept_type: auto | entity | item | block
            language: Language tag for display text

        Returns:
            ExpandedConcept (all fields optional)

        Raises:
            ConceptError: Bad input or unparsable model output
        """
        concept = self.validate_concept(concept)
        if concept_type not in CONCEPT_TYPES:
            raise ConceptError(f"Unknown concept type '{concept_type}' (expected one of {', '.join(CONCEPT_TYPES)})")

        logger.info(f"[ConceptExpander] Expanding concept: \"{concept[:100]}\" ({concept_type}, {language})")
        start_time = time.time()

        try:
            data = self.chain.invoke({
                "concept": concept,
                "concept_type_instruction": CONCEPT_TYPE_INSTRUCTIONS[concept_type],
                "language_instruction": language_instruction(language),
                "json_contract": JSON_CONTRACT,
            })
        except OutputParserException as e:
            logger.error(f"[ConceptExpander] Unparsable model output: {e}")
            raise ConceptError(f"Model did not return valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise ConceptError(f"Model returned {type(data).__name__}, expected a JSON object")

        expanded = ExpandedConcept.model_validate(data)
        if not expanded.original_concept:
            expanded.original_concept = concept
        if not expanded.concept_type and concept_type != "auto":
            expanded.concept_type = concept_type
        if not expanded.concept_type:
            expanded.concept_type = self._infer_type(expanded)

        logger.info(
            f"[ConceptExpander] Expansion complete in {time.time() - start_time:.2f}s. "
            f"Type: {expanded.concept_type}, Quality: {expanded.quality_score}"
        )
        return expanded

    @staticmethod
    def _infer_type(expanded: ExpandedConcept) -> Optional[str]:
        for kind in ("entity", "item", "block"):
            if getattr(expanded, kind) is not None:
                return kind
        return None

    @staticmethod
    def to_definitions(expanded: ExpandedConcept, namespace: Optional[str] = None) -> ConvertedDefinitions:
        return to_definitions(expanded, namespace)

    def describe(self) -> Dict[str, Any]:
        """Model settings reported alongside results"""
        return {"model": self.config.model, "temperature": self.config.temperature}


__all__ = ["ConceptExpander", "ConceptError", "CONCEPT_TYPES"]
