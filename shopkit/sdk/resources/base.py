"""Generic typed CRUD adapters shared by the resource services."""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING, Any, ClassVar, Generic, Mapping, TypeVar

from pydantic import BaseModel, create_model

from shopkit.sdk.pagination import Pagination

if TYPE_CHECKING:
    from shopkit.sdk.client import ShopifyClient

T = TypeVar("T", bound=BaseModel)

Options = BaseModel | Mapping[str, Any] | None


@lru_cache(maxsize=None)
def envelope(key: str, item_type: Any) -> type[BaseModel]:
    """Model for a ``{key: item}`` response body; a missing key decodes to None."""
    return create_model(f"Envelope_{key}", **{key: (item_type | None, None)})


class ListableResource(Generic[T]):
    """List endpoints at ``<base_path>.json`` wrapped as ``{plural: [...]}``."""

    model: ClassVar[type[BaseModel]]
    base_path: ClassVar[str] = ""
    singular: ClassVar[str] = ""
    plural: ClassVar[str] = ""

    def __init__(self, client: ShopifyClient, base_path: str | None = None) -> None:
        self._client = client
        self.path = base_path if base_path is not None else self.base_path

    def _path(self, *parts: Any) -> str:
        return "/".join([self.path, *(str(p) for p in parts)]) + ".json"

    def _one(self) -> type[BaseModel]:
        return envelope(self.singular, self.model)

    def _many(self) -> type[BaseModel]:
        return envelope(self.plural, list[self.model])

    def list(self, options: Options = None, **kwargs: Any) -> list[T]:
        result = self._client.get(self._path(), self._many(), options, **kwargs)
        return getattr(result, self.plural) or []

    def list_with_pagination(
        self, options: Options = None, **kwargs: Any
    ) -> tuple[list[T], Pagination]:
        result, pagination = self._client.list_with_pagination(
            self._path(), self._many(), options, **kwargs
        )
        return getattr(result, self.plural) or [], pagination

    def __repr__(self) -> str:
        return f"{type(self).__name__}(path={self.path!r})"


class ReadOnlyResource(ListableResource[T]):
    """Adds ``get`` by id."""

    def get(self, resource_id: int, options: Options = None, **kwargs: Any) -> T | None:
        result = self._client.get(self._path(resource_id), self._one(), options, **kwargs)
        return getattr(result, self.singular)


class Resource(ReadOnlyResource[T]):
    """Full CRUD plus ``count``; request bodies are wrapped as ``{request_key: entity}``."""

    # Key used to wrap request bodies when it differs from ``singular``.
    request_key: ClassVar[str | None] = None

    def count(self, options: Options = None, **kwargs: Any) -> int:
        return self._client.count(self._path("count"), options, **kwargs)

    def _wrap(self, entity: BaseModel) -> dict[str, BaseModel]:
        return {self.request_key or self.singular: entity}

    def create(self, entity: T, **kwargs: Any) -> T | None:
        result = self._client.post(
            self._path(), self._wrap(entity), self._one(), **kwargs
        )
        return getattr(result, self.singular)

    def update(self, entity: T, **kwargs: Any) -> T | None:
        """PUT to ``<base_path>/<entity.id>.json``."""
        result = self._client.put(
            self._path(entity.id), self._wrap(entity), self._one(), **kwargs
        )
        return getattr(result, self.singular)

    def delete(self, resource_id: int, **kwargs: Any) -> None:
        self._client.delete(self._path(resource_id), **kwargs)
