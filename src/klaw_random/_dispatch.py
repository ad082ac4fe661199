"""@typeclass decorator: runtime dispatch on the type of the first argument.

Used to pick the uniform sampler backend for a range's value type. New
value types plug in by registering an instance:

```python
@uniform_sampler.instance(Fraction)
def _fraction_sampler(low, high, *, inclusive, dtype):
    ...
```
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import wrapt

__all__ = ['NoInstanceError', 'TypeClass', 'typeclass']


class NoInstanceError(TypeError):
    """Raised when no typeclass instance is registered for a type."""

    def __init__(self, typeclass_name: str, value_type: type) -> None:
        self.typeclass_name = typeclass_name
        self.value_type = value_type
        super().__init__(f"No instance of '{typeclass_name}' for type '{value_type.__name__}'")


class TypeClass[F: Callable[..., Any]](wrapt.ObjectProxy):
    """A polymorphic function with per-type implementations.

    Lookup tries the exact type of the first argument, then its MRO. The
    decorated function only provides the name and signature.

    Attributes:
        _self_name: The name of the typeclass function.
        _self_instances: Mapping from registered type to implementation.
    """

    def __init__(self, signature_fn: F) -> None:
        super().__init__(signature_fn)
        self._self_name = signature_fn.__name__
        self._self_instances: dict[type, Callable[..., Any]] = {}

    def instance(self, type_: type) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Register an implementation for `type_` (and its subclasses)."""

        def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
            self._self_instances[type_] = fn
            return fn

        return decorator

    def supports(self, type_: type) -> bool:
        return self._find_instance(type_) is not None

    def _find_instance(self, value_type: type) -> Callable[..., Any] | None:
        if value_type in self._self_instances:
            return self._self_instances[value_type]
        for base in value_type.__mro__[1:]:
            if base in self._self_instances:
                return self._self_instances[base]
        return None

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        if not args:
            raise TypeError(f'{self._self_name}() requires at least one argument')
        instance_fn = self._find_instance(type(args[0]))
        if instance_fn is None:
            raise NoInstanceError(self._self_name, type(args[0]))
        return instance_fn(*args, **kwargs)

    def __repr__(self) -> str:
        return f'<typeclass {self._self_name} with {len(self._self_instances)} instances>'


def typeclass[F: Callable[..., Any]](fn: F) -> TypeClass[F]:
    """Turn a signature function into a typeclass.

    Example:
        ```python
        @typeclass
        def describe(value) -> str: ...

        @describe.instance(int)
        def _describe_int(value: int) -> str:
            return f'int {value}'
        ```
    """
    return TypeClass(fn)
