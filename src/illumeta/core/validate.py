from operator import eq, ge, le, lt
from typing import Any, Callable, Type

Classes = type | tuple[type | tuple[Any, ...], ...]

COMPARISON_SIGNS = {eq: "=",
                    ge: "≥",
                    le: "≤",
                    lt: "<"}


def require_issubclass(name: str,
                       value: type,
                       classes: Classes,
                       error_type: Type[ValueError] = ValueError) -> None:
    """ Raise an error if value is not a subclass of classes. """
    if not issubclass(value, classes):
        require_issubclass("error_type", error_type, ValueError)
        raise error_type(f"{name} must be a subclass of {classes}, "
                         f"but got {repr(value)}")


def require_isinstance(name: str,
                       value: Any,
                       classes: Classes,
                       error_type: Type[TypeError] = TypeError) -> None:
    """ Raise an error if value is not an instance of classes. """
    if not isinstance(value, classes):
        require_issubclass("error_type", error_type, TypeError)
        raise error_type(f"{name} must be an instance of {classes}, "
                         f"but got {repr(value)} of type {type(value)}")


def _require_compare(name: str,
                     value: Any,
                     comparison: Callable[[Any, Any], bool],
                     compare_name: str,
                     compare_value: Any,
                     classes: Classes,
                     error_type: Type[ValueError]):
    require_isinstance(name, value, classes)
    if not comparison(value, compare_value):
        require_issubclass("error_type", error_type, ValueError)
        sign = COMPARISON_SIGNS[comparison]
        if compare_name:
            message = (f"Must have {name} {sign} {compare_name}, "
                       f"but got {name}={repr(value)} "
                       f"and {compare_name}={repr(compare_value)}")
        else:
            message = (f"Must have {name} {sign} {repr(compare_value)}, "
                       f"but got {repr(value)}")
        raise error_type(message)


def require_equal(name: str,
                  value: Any,
                  other_value: Any,
                  other_name: str = "",
                  classes: Classes = object,
                  error_type: Type[ValueError] = ValueError):
    """ Require that value = other_value. """
    _require_compare(name, value, eq, other_name, other_value,
                     classes, error_type)


def require_atleast(name: str,
                    value: Any,
                    minimum_value: Any,
                    minimum_name: str = "",
                    classes: Classes = object,
                    error_type: Type[ValueError] = ValueError):
    """ Require that value ≥ minimum_value. """
    _require_compare(name, value, ge, minimum_name, minimum_value,
                     classes, error_type)


def require_atmost(name: str,
                   value: Any,
                   maximum_value: Any,
                   maximum_name: str = "",
                   classes: Classes = object,
                   error_type: Type[ValueError] = ValueError):
    """ Require that value ≤ maximum_value. """
    _require_compare(name, value, le, maximum_name, maximum_value,
                     classes, error_type)


def require_less(name: str,
                 value: Any,
                 other_value: Any,
                 other_name: str = "",
                 classes: Classes = object,
                 error_type: Type[ValueError] = ValueError):
    """ Require that value < other_value. """
    _require_compare(name, value, lt, other_name, other_value,
                     classes, error_type)


def require_between(name: str,
                    value: Any,
                    minimum_value: Any | None,
                    maximum_value: Any | None,
                    classes: Classes = object,
                    error_type: Type[ValueError] = ValueError):
    """ Require that value is in [minimum_value, maximum_value]; either
    bound may be None to leave that side unbounded. """
    if minimum_value is not None:
        require_atleast(name, value, minimum_value,
                        classes=classes, error_type=error_type)
    if maximum_value is not None:
        require_atmost(name, value, maximum_value,
                       classes=classes, error_type=error_type)
