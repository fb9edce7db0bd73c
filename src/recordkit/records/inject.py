"""``${name}`` variable injection."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from recordkit.core.errors import VariableNotFoundError
from recordkit.records.sprint import sprint


def inject_variables(template: str, variables: Mapping[str, Any]) -> Any:
    """Replace each ``${name}`` in ``template`` with its variable.

    A template without any placeholder is itself taken as a variable name
    and that variable's raw value is returned. An unterminated placeholder
    is dropped from the output.

    >>> inject_variables("Hello ${name}!", {"name": "Earth"})
    'Hello Earth!'
    >>> inject_variables("count", {"count": 3})
    3

    Raises:
        VariableNotFoundError: A name has no entry in ``variables``
    """
    output: list[str] = []
    name: list[str] = []
    has_variable = in_variable = False
    previous = ""

    for c in template:
        if in_variable:
            if c == "}":
                in_variable = False
                output.append(_lookup(variables, "".join(name)))
                name = []
            else:
                name.append(c)
        elif c == "{" and previous == "$":
            in_variable = has_variable = True
            output.pop()
        else:
            output.append(c)
        previous = c

    if has_variable:
        return "".join(output)
    if template not in variables:
        raise VariableNotFoundError(template)
    return variables[template]


def _lookup(variables: Mapping[str, Any], name: str) -> str:
    if name not in variables:
        raise VariableNotFoundError(name)
    return sprint(variables[name])


__all__ = ["inject_variables"]
