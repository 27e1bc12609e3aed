from typing import Any, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError as PydanticValidationError

from ...exceptions import validation_error_from_pydantic

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def coerce(schema: Type[SchemaT], data: Union[SchemaT, dict, Any]) -> SchemaT:
    """Accept an already validated schema or validate a raw mapping against it."""
    if isinstance(data, schema):
        return data
    try:
        return schema.model_validate(data)
    except PydanticValidationError as e:
        raise validation_error_from_pydantic(e)
