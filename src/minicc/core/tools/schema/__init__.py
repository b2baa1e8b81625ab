"""Tool schema generation and validation."""

from .schema_validator import SchemaValidator
from .function_schema import FunctionSchemaBuilder

__all__ = ["SchemaValidator", "FunctionSchemaBuilder"]
