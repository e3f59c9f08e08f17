"""Rule-based classification of natural-language API questions."""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from ..openapi_processor.data_classes import HttpMethod, Specification
from ..utils.text_utils import identifier_words
from .data_classes import ENDPOINT, GENERAL, SCHEMA, UNKNOWN, QueryClassification, QueryEntities

logger = logging.getLogger(__name__)

# Scanned in this order; the first keyword found in the query decides the method.
METHOD_KEYWORDS: Tuple[Tuple[HttpMethod, Tuple[str, ...]], ...] = (
    (HttpMethod.GET, ("get", "fetch", "retrieve", "read", "find", "show", "list")),
    (HttpMethod.POST, ("create", "add", "post", "new", "insert", "submit")),
    (HttpMethod.PUT, ("update", "edit", "change", "modify", "replace", "put")),
    (HttpMethod.DELETE, ("delete", "remove", "destroy", "erase")),
    (HttpMethod.PATCH, ("patch", "partial update", "partial edit", "update part")),
)


@dataclass(frozen=True)
class ClassificationRule:
    """One row of the decision table."""

    name: str
    condition: Callable[[QueryEntities], bool]
    kind: str
    confidence: float
    # Entities carried into the classification when this row fires
    project: Callable[[QueryEntities], QueryEntities]


CLASSIFICATION_RULES: Tuple[ClassificationRule, ...] = (
    ClassificationRule(
        name="operation_id",
        condition=lambda e: e.operation_id is not None,
        kind=ENDPOINT,
        confidence=0.9,
        project=lambda e: QueryEntities(operation_id=e.operation_id, tags=e.tags, method=e.method),
    ),
    ClassificationRule(
        name="schema_name",
        condition=lambda e: e.schema_name is not None,
        kind=SCHEMA,
        confidence=0.8,
        project=lambda e: QueryEntities(schema_name=e.schema_name),
    ),
    ClassificationRule(
        name="tags_and_method",
        condition=lambda e: bool(e.tags) and e.method is not None,
        kind=ENDPOINT,
        confidence=0.7,
        project=lambda e: QueryEntities(tags=e.tags, method=e.method),
    ),
    ClassificationRule(
        name="tags",
        condition=lambda e: bool(e.tags),
        kind=GENERAL,
        confidence=0.6,
        project=lambda e: QueryEntities(tags=e.tags),
    ),
    ClassificationRule(
        name="method",
        condition=lambda e: e.method is not None,
        kind=GENERAL,
        confidence=0.5,
        project=lambda e: QueryEntities(method=e.method),
    ),
    ClassificationRule(
        name="fallback",
        condition=lambda e: True,
        kind=GENERAL,
        confidence=0.3,
        project=lambda e: QueryEntities(),
    ),
)

DEGRADED = QueryClassification(kind=UNKNOWN, confidence=0.0)


def extract_method(query: str) -> Optional[HttpMethod]:
    """First method whose keyword appears in the (lowercase) query."""
    for method, keywords in METHOD_KEYWORDS:
        for keyword in keywords:
            if keyword in query:
                return method
    return None


def extract_tags(query: str, specification: Specification) -> Tuple[str, ...]:
    """Tags whose lowercase text occurs in the query, in first-seen endpoint order."""
    seen: Dict[str, str] = {}
    for endpoint in specification.endpoints:
        for tag in endpoint.tags:
            seen.setdefault(tag.lower(), tag)

    return tuple(tag for lowered, tag in seen.items() if lowered and lowered in query)


def _matches_identifier(query: str, identifier: str) -> bool:
    lowered = identifier.lower()
    if lowered and lowered in query:
        return True
    words = identifier_words(identifier)
    return bool(words) and words in query


def _first_identifier(query: str, identifiers: Iterable[str]) -> Optional[str]:
    for identifier in identifiers:
        if _matches_identifier(query, identifier):
            return identifier
    return None


def extract_operation_id(query: str, specification: Specification) -> Optional[str]:
    """First operation id found verbatim or as space-separated words."""
    return _first_identifier(query, (endpoint.operation_id for endpoint in specification.endpoints))


def extract_schema_name(query: str, specification: Specification) -> Optional[str]:
    """First schema name found verbatim or as space-separated words."""
    return _first_identifier(query, (schema.name for schema in specification.schemas))


class QueryClassifier:
    """Classifies queries against a specification using an ordered rule table."""

    def __init__(self, rules: Tuple[ClassificationRule, ...] = CLASSIFICATION_RULES):
        self.rules = rules

    def extract_entities(self, query: str, specification: Specification) -> QueryEntities:
        """Run every extractor over the normalized query."""
        normalized = query.lower()
        return QueryEntities(
            operation_id=extract_operation_id(normalized, specification),
            schema_name=extract_schema_name(normalized, specification),
            tags=extract_tags(normalized, specification),
            method=extract_method(normalized),
        )

    def decide(self, entities: QueryEntities) -> QueryClassification:
        """Apply the first rule whose condition holds."""
        for rule in self.rules:
            if rule.condition(entities):
                return QueryClassification(kind=rule.kind, confidence=rule.confidence, entities=rule.project(entities))
        return DEGRADED

    def classify(self, query: str, specification: Optional[Specification]) -> QueryClassification:
        """
        Classify a query; never raises.

        Returns kind "unknown" with confidence 0 when no specification is
        loaded or an extractor fails.
        """
        if specification is None:
            logger.warning("API specification not loaded, cannot classify query")
            return DEGRADED

        try:
            entities = self.extract_entities(query if isinstance(query, str) else "", specification)
            classification = self.decide(entities)
        except Exception as e:
            logger.error(f"Error classifying query: {e}")
            return DEGRADED

        logger.debug(f"Classified query '{query}' as {classification.kind} ({classification.confidence})")
        return classification


def rule_names(rules: Iterable[ClassificationRule] = CLASSIFICATION_RULES) -> List[str]:
    """Rule names in evaluation order."""
    return [rule.name for rule in rules]
