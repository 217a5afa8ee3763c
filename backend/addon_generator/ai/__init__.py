"""
Content-expansion collaborator (Gemini via langchain)
"""
from .concept_expander import ConceptExpander, ConceptError, CONCEPT_TYPES
from .converter import ConvertedDefinitions, to_definitions

__all__ = [
    "ConceptExpander",
    "ConceptError",
    "CONCEPT_TYPES",
    "ConvertedDefinitions",
    "to_definitions",
]
