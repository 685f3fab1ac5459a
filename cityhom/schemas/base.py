"""
Shared schema building blocks: camelCase wire models, normalized string types,
the response envelope and the paginated page shape.
"""

from pydantic import (
    AnyHttpUrl,
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    TypeAdapter,
    ValidationError,
    create_model,
)
from pydantic.alias_generators import to_camel
from typing import Annotated, Any, ClassVar, Dict, FrozenSet, Generic, List, Optional, Type, TypeVar
import math

T = TypeVar("T")
ModelT = TypeVar("ModelT", bound=BaseModel)

# Strings stored trimmed and lowercased
LowerStr = Annotated[str, StringConstraints(strip_whitespace=True, to_lower=True)]
RequiredLowerStr = Annotated[str, StringConstraints(strip_whitespace=True, to_lower=True, min_length=1)]
TrimmedStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
_HTTP_URL = TypeAdapter(AnyHttpUrl)


def _validate_http_url(value: str) -> str:
    try:
        return str(_HTTP_URL.validate_python(value))
    except ValidationError as exc:
        raise ValueError(exc.errors()[0]["msg"]) from None


# Absolute http(s) URL, kept as a plain string on the model
UrlStr = Annotated[str, AfterValidator(_validate_http_url)]


class CamelModel(BaseModel):
    """Base model exchanging camelCase JSON while keeping snake_case attributes."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    # Fields an update may reset to null; filled in by partial_model
    clearable_fields: ClassVar[FrozenSet[str]] = frozenset()


class APIResponse(CamelModel, Generic[T]):
    """Success envelope returned by every endpoint."""

    success: bool = True
    message: str
    data: Optional[T] = None


class Page(CamelModel, Generic[T]):
    """Paginated result window."""

    docs: List[T]
    total_docs: int = Field(..., ge=0)
    limit: int
    page: int
    total_pages: int
    paging_counter: int
    has_prev_page: bool
    has_next_page: bool
    prev_page: Optional[int] = None
    next_page: Optional[int] = None

    @classmethod
    def build(cls, docs: List[T], total: int, page: int, limit: int) -> "Page[T]":
        """Compute the page metadata for a window of `limit` items starting at `page`."""
        total_pages = max(1, math.ceil(total / limit))
        has_prev = page > 1
        has_next = page * limit < total
        return cls(
            docs=docs,
            total_docs=total,
            limit=limit,
            page=page,
            total_pages=total_pages,
            paging_counter=(page - 1) * limit + 1,
            has_prev_page=has_prev,
            has_next_page=has_next,
            prev_page=page - 1 if has_prev else None,
            next_page=page + 1 if has_next else None,
        )


def partial_model(model: Type[ModelT], name: str) -> Type[ModelT]:
    """
    Derive an update schema where every field of `model` is optional.

    Field constraints and validators are kept, so supplied values are checked
    with the same rules as on create.
    """
    fields = {}
    for field_name, field in model.model_fields.items():
        annotation = field.annotation
        if field.metadata:
            annotation = Annotated[(annotation, *field.metadata)]
        fields[field_name] = (Optional[annotation], Field(None, description=field.description))
    partial = create_model(name, __base__=model, **fields)
    partial.clearable_fields = frozenset(
        field_name
        for field_name, field in model.model_fields.items()
        if not field.is_required() and field.default is None and field.default_factory is None
    )
    return partial


def update_values(update: BaseModel) -> Dict[str, Any]:
    """
    Column values for a partial update.

    Only fields present in the request are kept. An explicit null clears an
    optional field and is dropped for fields that always need a value.
    """
    clearable = getattr(type(update), "clearable_fields", frozenset())
    return {
        key: value
        for key, value in update.model_dump(mode="json", exclude_unset=True).items()
        if value is not None or key in clearable
    }
