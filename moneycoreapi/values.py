"""
Parameter tree objects, and the conversion of plain Python data into them.

A parameter tree is made of the variants below. The encoder only ever
flattens trees, so the meaning of a value (boolean, number, string...) is
fixed once, here, instead of being guessed while the query is built.
"""

import dataclasses
import math
from typing import Any, Dict, List, Union

from .errors import EncodingError, StructuralEncodingError


@dataclasses.dataclass(frozen=True)
class Obj:
    items: Dict[str, "Param"]


@dataclasses.dataclass(frozen=True)
class Arr:
    items: List["Param"]


@dataclasses.dataclass(frozen=True)
class Bool:
    value: bool


@dataclasses.dataclass(frozen=True)
class Num:
    value: Union[int, float]


@dataclasses.dataclass(frozen=True)
class Str:
    value: str


@dataclasses.dataclass(frozen=True)
class Null:
    pass


Param = Union[Obj, Arr, Bool, Num, Str, Null]

PARAM_TYPES = (Obj, Arr, Bool, Num, Str, Null)


class NonFiniteFloats:
    """
    What to do with inf, -inf and nan while converting.

    With ``throw`` set (the default) they are refused. Otherwise they are
    converted to the given strings.
    """

    throw = True
    positive_infinity = "inf"
    negative_infinity = "-inf"
    nan = "nan"

    def __init__(self, **kwargs):
        for key, val in kwargs.items():
            setattr(self, key, val)

    def convert(self, val: float, path: str) -> Param:
        if self.throw:
            raise StructuralEncodingError(
                f"non-finite float {val!r} at {path}"
            )
        if math.isnan(val):
            return Str(self.nan)
        if val > 0:
            return Str(self.positive_infinity)
        return Str(self.negative_infinity)


STRICT = NonFiniteFloats()


def to_param(
    val: Any, floats: NonFiniteFloats = STRICT, path: str = "$"
) -> Param:
    """
    Convert a value into a parameter tree.

    Accepted: dict (str keys), list, tuple, bool, int, float, str, None,
    dataclass instances, objects with a ``to_params()`` method, and trees
    that are already made of parameter objects.
    """
    if isinstance(val, PARAM_TYPES):
        return val
    if val is None:
        return Null()
    # bool is a subclass of int, so it must come first.
    if isinstance(val, bool):
        return Bool(val)
    if isinstance(val, int):
        return Num(val)
    if isinstance(val, float):
        if math.isfinite(val):
            return Num(val)
        return floats.convert(val, path)
    if isinstance(val, str):
        return Str(val)
    if isinstance(val, dict):
        items: Dict[str, Param] = {}
        for key, inner in val.items():
            if not isinstance(key, str):
                raise StructuralEncodingError(
                    f"key {key!r} at {path} is not a string"
                )
            items[key] = to_param(inner, floats, f"{path}.{key}")
        return Obj(items)
    if isinstance(val, (list, tuple)):
        return Arr(
            [
                to_param(inner, floats, f"{path}[{i}]")
                for i, inner in enumerate(val)
            ]
        )
    if dataclasses.is_dataclass(val) and not isinstance(val, type):
        return to_param(
            {f.name: getattr(val, f.name) for f in dataclasses.fields(val)},
            floats,
            path,
        )
    if hasattr(val, "to_params"):
        try:
            converted = val.to_params()
        except EncodingError:
            raise
        except Exception as err:
            raise StructuralEncodingError(
                f"{type(val).__name__}.to_params() failed at {path}: {err}"
            ) from err
        return to_param(converted, floats, path)

    raise StructuralEncodingError(
        f"unsupported type {type(val).__name__} at {path}"
    )
