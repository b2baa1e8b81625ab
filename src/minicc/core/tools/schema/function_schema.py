"""Derive a tool's JSON schema and argument model from a Python function signature."""

import inspect
from typing import Annotated, Any, Callable, Dict, Tuple, Type, cast, get_args, get_origin

import jsonref  # type: ignore
from pydantic import BaseModel, Field, create_model
from pydantic.fields import FieldInfo

from ...exceptions import ToolValidationError
from ...logger import get_logger
from .schema_validator import SchemaValidator

logger = get_logger(__name__)


class FunctionSchemaBuilder:
    """Turns ``Annotated[Type, Field(description=...)]`` parameters into a pydantic model and schema."""

    @classmethod
    def build(cls, func: Callable[..., Any], tool_name: str) -> Tuple[Dict[str, Any], Type[BaseModel]]:
        """Build the parameter schema and argument model for ``func``.

        Args:
            func: The tool implementation.
            tool_name: Name of the tool, used in model names and error messages.

        Returns:
            The sanitized JSON schema and the pydantic model validating arguments.

        Raises:
            ToolValidationError: If a parameter lacks a description, is variadic,
                or the schema is recursive.
        """
        fields: Dict[str, Any] = {}
        for param_name, param in inspect.signature(func).parameters.items():
            if param_name in ("self", "cls"):
                continue
            if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
                msg = f"Tool '{tool_name}' cannot declare variadic parameter '{param_name}'."
                logger.error(msg)
                raise ToolValidationError(msg)

            description = cls._extract_description(param.annotation, param_name, tool_name)
            default = param.default if param.default is not inspect.Parameter.empty else ...
            fields[param_name] = (param.annotation, Field(default=default, description=description))

        args_model = create_model(f"{tool_name}Params", **cast(Dict[str, Any], fields))
        raw_schema = args_model.model_json_schema()

        SchemaValidator.assert_no_recursive_refs(raw_schema)
        # proxies=False returns plain dicts instead of lazy JsonRef objects
        resolved = jsonref.replace_refs(raw_schema, proxies=False)
        return SchemaValidator.sanitize_schema(resolved), args_model

    @staticmethod
    def get_description(func: Callable[..., Any], tool_name: str) -> str:
        """Return the docstring used as tool description.

        Raises:
            ToolValidationError: If the function has no docstring.
        """
        doc = inspect.getdoc(func)
        if not doc:
            msg = f"Tool '{tool_name}' missing docstring. The model needs a description of what the tool does."
            logger.error(msg)
            raise ToolValidationError(msg)
        return doc

    @staticmethod
    def _extract_description(annotation: Any, param_name: str, tool_name: str) -> str:
        if get_origin(annotation) is Annotated:
            for metadata in get_args(annotation)[1:]:
                if isinstance(metadata, FieldInfo) and metadata.description:
                    return metadata.description

        msg = (
            f"Parameter '{param_name}' in tool '{tool_name}' is missing a description.\n"
            f"Usage: {param_name}: Annotated[Type, Field(description='...')] = ..."
        )
        logger.error(msg)
        raise ToolValidationError(msg)
