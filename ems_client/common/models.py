"""Base pydantic model for backend DTOs."""

from typing import Any, List, Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from ems_client.common.exceptions import ResponseDecodeError

M = TypeVar("M", bound="ApiModel")


class ApiModel(BaseModel):
    """DTO base: snake_case attributes, camelCase on the wire.

    Unknown fields from the backend are ignored so newer server versions do
    not break older clients.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_payload(self) -> dict:
        """JSON-ready body with camelCase keys and unset optionals dropped."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @classmethod
    def from_response(cls: Type[M], data: Any) -> M:
        """Validate a decoded 2xx body; a shape mismatch raises ``ResponseDecodeError``."""
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ResponseDecodeError(cls.__name__, exc.error_count()) from exc

    @classmethod
    def list_from_response(cls: Type[M], data: Any) -> List[M]:
        """Same as :meth:`from_response` for a JSON array; ``None`` is an empty list."""
        if data is None:
            return []
        if not isinstance(data, list):
            raise ResponseDecodeError(f"list[{cls.__name__}]")
        return [cls.from_response(item) for item in data]
