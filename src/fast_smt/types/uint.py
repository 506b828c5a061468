"""Fixed-width unsigned integers used for heights, counts, bitmaps and path keys."""

from __future__ import annotations

from typing import Any, ClassVar, Literal, SupportsIndex, SupportsInt

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema
from typing_extensions import Self


class BaseUint(int):
    """
    An `int` pinned to the range `[0, 2**BITS)`.

    Values of different widths never compare with each other or with plain `int`s:
    mixing a height with a path key is always a bug, so it raises `TypeError`.
    """

    BITS: ClassVar[int]
    """Width in bits (set by subclasses)."""

    def __new__(cls, value: SupportsInt) -> Self:
        """
        Range-check `value` and wrap it.

        Raises:
            OverflowError: If `value` does not fit in `BITS` unsigned bits.
        """
        int_value = int(value)
        if int_value < 0 or int_value >> cls.BITS:
            raise OverflowError(f"{int_value} is out of range for {cls.__name__}")
        return super().__new__(cls, int_value)

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """Validate through the constructor; serialize as a plain integer."""

        def validate(value: Any) -> BaseUint:
            try:
                return cls(value)
            except (OverflowError, TypeError) as e:
                raise ValueError(str(e)) from e

        from_value = core_schema.no_info_plain_validator_function(validate)
        return core_schema.json_or_python_schema(
            json_schema=core_schema.chain_schema(
                [core_schema.int_schema(ge=0, lt=2**cls.BITS), from_value]
            ),
            python_schema=from_value,
            serialization=core_schema.plain_serializer_function_ser_schema(int),
        )

    def to_bytes(
        self,
        length: SupportsIndex | None = None,
        byteorder: Literal["little", "big"] = "little",
        *,
        signed: bool = False,
    ) -> bytes:
        """Little-endian, `BITS // 8` bytes wide unless told otherwise."""
        width = self.BITS // 8 if length is None else int(length)
        return super().to_bytes(width, byteorder, signed=signed)

    def encode_bytes(self) -> bytes:
        """The fixed-width little-endian encoding."""
        return self.to_bytes()

    @classmethod
    def decode_bytes(cls, data: bytes) -> Self:
        """Parse a fixed-width little-endian encoding."""
        width = cls.BITS // 8
        if len(data) != width:
            raise ValueError(f"{cls.__name__} expects exactly {width} bytes, got {len(data)}")
        return cls(int.from_bytes(data, "little"))

    def _require_same_type(self, other: object, op: str) -> None:
        if not isinstance(other, type(self)):
            raise TypeError(
                f"Unsupported operand type(s) for {op}: "
                f"'{type(self).__name__}' and '{type(other).__name__}'"
            )

    def __eq__(self, other: object) -> bool:
        self._require_same_type(other, "==")
        return int(self) == int(other)  # type: ignore[call-overload]

    def __ne__(self, other: object) -> bool:
        self._require_same_type(other, "!=")
        return int(self) != int(other)  # type: ignore[call-overload]

    def __lt__(self, other: Any) -> bool:
        self._require_same_type(other, "<")
        return int(self) < int(other)

    def __le__(self, other: Any) -> bool:
        self._require_same_type(other, "<=")
        return int(self) <= int(other)

    def __gt__(self, other: Any) -> bool:
        self._require_same_type(other, ">")
        return int(self) > int(other)

    def __ge__(self, other: Any) -> bool:
        self._require_same_type(other, ">=")
        return int(self) >= int(other)

    def __hash__(self) -> int:
        return hash((type(self), int(self)))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int(self)})"

    def __str__(self) -> str:
        return str(int(self))


class Uint8(BaseUint):
    """An 8-bit unsigned integer; branch heights."""

    BITS = 8


class Uint32(BaseUint):
    """A 32-bit unsigned integer; proof header counts."""

    BITS = 32


class Uint256(BaseUint):
    """A 256-bit unsigned integer; hint bitmaps and path keys."""

    BITS = 256
