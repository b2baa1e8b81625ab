"""Checks and clean-up applied to generated JSON schemas before they are advertised to the model."""

from typing import Any, Dict, Set

from ...exceptions import ToolValidationError
from ...logger import get_logger

logger = get_logger(__name__)

_METADATA_KEYS = ("$defs", "definitions", "$schema", "$id", "title")
_SCHEMA_MAP_KEYS = ("properties", "patternProperties")


class SchemaValidator:
    """
    Helper for validating and sanitizing tool parameter schemas.
    """

    @staticmethod
    def assert_no_recursive_refs(schema: Dict[str, Any]) -> None:
        """
        Walk local ``$ref`` links and fail on cycles, which cannot be inlined.

        Args:
            schema: The JSON schema to check.

        Raises:
            ToolValidationError: If a recursive reference is found.
        """
        definitions = schema.get("$defs") or schema.get("definitions") or {}

        def visit(node: Any, seen: Set[str]) -> None:
            if isinstance(node, list):
                for item in node:
                    visit(item, seen)
                return
            if not isinstance(node, dict):
                return

            ref = node.get("$ref")
            if ref is None:
                for value in node.values():
                    visit(value, seen)
                return

            if ref in seen:
                msg = (
                    f"Recursive structure detected: {ref}. "
                    "Tool arguments cannot be self-referencing; pass ids or flat lists instead."
                )
                logger.error(msg)
                raise ToolValidationError(msg)

            target = ref.rsplit("/", 1)[-1] if ref.startswith("#/") else None
            if target in definitions:
                visit(definitions[target], seen | {ref})

        visit(schema, set())

    @staticmethod
    def sanitize_schema(schema: Any) -> Any:
        """
        Strip pydantic metadata and collapse ``Optional[X]`` unions into ``X``.

        Objects get ``additionalProperties: false`` unless they declare it.

        Args:
            schema: The JSON schema (already ref-resolved) to clean.

        Returns:
            The sanitized schema.
        """
        if not isinstance(schema, dict):
            return schema

        cleaned = {key: value for key, value in schema.items() if key not in _METADATA_KEYS}

        variants = cleaned.get("anyOf")
        if isinstance(variants, list):
            non_null = [v for v in variants if not (isinstance(v, dict) and v.get("type") == "null")]
            if len(non_null) == 1 and isinstance(non_null[0], dict):
                collapsed = dict(non_null[0])
                for key in ("description", "default"):
                    if key in cleaned:
                        collapsed[key] = cleaned[key]
                return SchemaValidator.sanitize_schema(collapsed)

        if cleaned.get("type") == "object":
            cleaned.setdefault("additionalProperties", False)

        for key, value in cleaned.items():
            if key in _SCHEMA_MAP_KEYS and isinstance(value, dict):
                # keys here are property names, not schema keywords
                cleaned[key] = {name: SchemaValidator.sanitize_schema(sub) for name, sub in value.items()}
            elif isinstance(value, dict):
                cleaned[key] = SchemaValidator.sanitize_schema(value)
            elif isinstance(value, list):
                cleaned[key] = [SchemaValidator.sanitize_schema(item) for item in value]

        return cleaned
