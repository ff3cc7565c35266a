"""Function registry: names the parser may resolve to unary functions."""

from __future__ import annotations

from types import MappingProxyType
from typing import Callable, Iterator, Mapping, MutableMapping

from .config import BUILTIN_FUNCTIONS, VARIABLES
from .expression import UnaryFunction
from .lexer import TokenKind, tokenize
from .types import LexError

Extension = Callable[[MutableMapping[str, UnaryFunction]], None]


class FunctionRegistry(Mapping[str, UnaryFunction]):
    """Immutable name -> unary function mapping.

    Built from the built-in table, then ``functions`` is merged in, then
    ``extend`` is called with the mutable dict so it can add, replace or
    remove entries. The result is frozen before any parsing happens.

    Example:
        >>> registry = FunctionRegistry(extend=lambda fns: fns.update(relu=lambda v: max(0.0, v)))
        >>> "relu" in registry
        True
    """

    def __init__(
        self,
        functions: Mapping[str, UnaryFunction] | None = None,
        extend: Extension | None = None,
        include_builtins: bool = True,
    ):
        table: dict[str, UnaryFunction] = dict(BUILTIN_FUNCTIONS) if include_builtins else {}
        if functions:
            table.update(functions)
        if extend is not None:
            extend(table)
        for name, function in table.items():
            _check_entry(name, function)
        self._functions = MappingProxyType(dict(table))

    def __getitem__(self, name: str) -> UnaryFunction:
        return self._functions[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._functions)

    def __len__(self) -> int:
        return len(self._functions)

    def __repr__(self) -> str:
        return f"FunctionRegistry({sorted(self._functions)!r})"

    def with_functions(self, functions: Mapping[str, UnaryFunction]) -> FunctionRegistry:
        """Return a new registry with ``functions`` added on top of this one."""
        table = dict(self._functions)
        table.update(functions)
        return FunctionRegistry(table, include_builtins=False)


def _is_identifier(name: str) -> bool:
    try:
        tokens = tokenize(name)
    except LexError:
        return False
    return (
        len(tokens) == 1
        and tokens[0].kind is TokenKind.IDENTIFIER
        and tokens[0].span == (0, len(name))
    )


def _check_entry(name: str, function: UnaryFunction) -> None:
    if not isinstance(name, str) or not _is_identifier(name):
        raise ValueError(f"Invalid function name: {name!r}")
    if name in VARIABLES:
        raise ValueError(f"Function name {name!r} shadows a variable")
    if not callable(function):
        raise TypeError(f"Function {name!r} is not callable")
