"""Transformer subpackage — imports trigger @register_transformer decorators."""

from form_binder.transformers.pass_through import PassThroughTransformer  # noqa: F401
from form_binder.transformers.string_list import StringListTransformer  # noqa: F401
from form_binder.transformers.entity import EntityToIdentifierTransformer  # noqa: F401
from form_binder.transformers.scalar import (  # noqa: F401
    BooleanToStringTransformer,
    IntegerToStringTransformer,
    NumberToStringTransformer,
    TrimStringTransformer,
)
from form_binder.transformers.datetime_string import DateTimeToStringTransformer  # noqa: F401
from form_binder.transformers.pydantic_model import PydanticModelTransformer  # noqa: F401
