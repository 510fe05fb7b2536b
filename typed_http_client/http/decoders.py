import json
import threading
from typing import Any, Dict, Tuple, Type, TypeVar

from pydantic import TypeAdapter, ValidationError
from typing_extensions import Protocol

T = TypeVar("T")

DECODING_ERRORS: Tuple[Type[Exception], ...] = (
    ValidationError,
    json.JSONDecodeError,
    UnicodeDecodeError,
)


class Decoder(Protocol):
    """Converts raw response bodies into values of the requested type.

    Attributes:
        decoding_errors: Exception types raised by `decode` for malformed input.
    """

    decoding_errors: Tuple[Type[Exception], ...]

    def decode(self, body: bytes, result_type: Type[T]) -> T: ...


class JSONDecoder:
    """Decoder of JSON bodies backed by pydantic type adapters.

    Any type pydantic can validate is accepted as `result_type`: models,
    dataclasses, TypedDicts, builtins and generic aliases such as `List[User]`.
    `bytes` and `str` bypass JSON parsing and return the raw or UTF-8 decoded body.
    """

    decoding_errors = DECODING_ERRORS

    def __init__(self, strict: bool = False):
        self.__strict = strict
        self.__adapters: Dict[Any, TypeAdapter] = {}
        self.__adapters_lock = threading.Lock()

    @property
    def strict(self) -> bool:
        return self.__strict

    def decode(self, body: bytes, result_type: Type[T]) -> T:
        if result_type is bytes:
            return body
        if result_type is str:
            return body.decode("utf-8")
        adapter = self._get_adapter(result_type=result_type)
        if not body:
            # empty body decodes to None only for types admitting it
            return adapter.validate_python(None, strict=self.__strict)
        return adapter.validate_json(body, strict=self.__strict)

    def _get_adapter(self, result_type: Type[T]) -> TypeAdapter:
        with self.__adapters_lock:
            adapter = self.__adapters.get(result_type)
            if adapter is None:
                adapter = TypeAdapter(result_type)
                self.__adapters[result_type] = adapter
            return adapter
