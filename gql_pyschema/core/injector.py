"""Construction of resolver services from their constructor dependencies.

Example:
    class Store:
        ...

    class UserResolver:
        def __init__(self, store: Store):
            self.store = store

    injector = Injector()
    resolver = injector.construct(UserResolver)   # UserResolver(Store())

    injector.provide(Store, lambda: Store(url="sqlite://"))
"""

import inspect
import logging
from typing import Any, Callable, TypeVar

from .errors import DependencyCycle, DependencyUnresolvable
from .introspection import (
    DeclarationSite,
    TypeIntrospector,
    default_introspector,
    positional_parameters,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Injector:
    """Builds instances depth-first from explicit factories or constructor annotations."""

    def __init__(self, introspector: TypeIntrospector = default_introspector):
        self.introspector = introspector
        self._factories: dict[type, Callable[[], Any]] = {}

    def provide(self, dependency: type, factory: Callable[[], Any]):
        """Use ``factory`` whenever ``dependency`` is needed."""
        self._factories[dependency] = factory

    def construct(self, cls: type[T]) -> T:
        """Return a new instance of ``cls`` with its dependencies constructed."""
        return self._construct(cls, [])

    def _construct(self, cls: type, chain: list[type]) -> Any:
        if cls in chain:
            names = [c.__name__ for c in chain[chain.index(cls):]] + [cls.__name__]
            raise DependencyCycle(names)

        factory = self._factories.get(cls)
        if factory is not None:
            return factory()

        chain = chain + [cls]
        dependencies = []
        for index, param in enumerate(self._constructor_parameters(cls)):
            if param.default is not param.empty:
                # defaulted parameters are left to the constructor
                break
            dependency = self.introspector.introspect(DeclarationSite(cls, "__init__", index))
            if not isinstance(dependency, type):
                raise DependencyUnresolvable(cls.__name__, param.name)
            dependencies.append(self._construct(dependency, chain))

        logger.debug(
            "Constructing %s(%s)", cls.__name__, ", ".join(type(d).__name__ for d in dependencies)
        )
        return cls(*dependencies)

    @staticmethod
    def _constructor_parameters(cls: type) -> list[inspect.Parameter]:
        init = inspect.getattr_static(cls, "__init__", None)
        if not inspect.isfunction(init):
            # object.__init__ or a C-level constructor
            return []
        return positional_parameters(init)


default_injector = Injector()
