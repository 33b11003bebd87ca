from __future__ import annotations

from typing import Any, Mapping

from .exceptions import InvariantViolation

ParameterMap = dict[str, Any]


def create_parameter_map(*params: Any) -> ParameterMap:
    """Build a parameter map from alternating key/value arguments.

    ``create_parameter_map("status", "open", "owner", 7)`` returns
    ``{"status": "open", "owner": 7}``. Keys are converted with ``str``.
    """

    if len(params) % 2:
        raise InvariantViolation(
            f"Not enough parameters {list(params)!r}",
            details={"count": len(params)},
        )
    result: ParameterMap = {}
    for index in range(0, len(params), 2):
        key = params[index]
        if key is None:
            raise InvariantViolation(
                "Parameter key must not be None", details={"position": index}
            )
        result[str(key)] = params[index + 1]
    return result


def bind_parameters(parameters: Mapping[str, Any] | None) -> ParameterMap:
    """Return the name -> value bindings applied to a statement."""

    if parameters is None:
        return {}
    bindings: ParameterMap = {}
    for key, value in parameters.items():
        if key is None:
            raise InvariantViolation("Parameter key must not be None")
        bindings[str(key)] = value
    return bindings


__all__ = ["ParameterMap", "bind_parameters", "create_parameter_map"]
