# Conframe CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Constructor injection for command instances.

`CommandFactory` keeps two maps keyed by type:

- services: ready-made instances (`add_service(CommandRegistry, registry)`)
- factories: callables `fn(factory) -> instance` (`add_factory(Clock, make_clock)`)

`create(cls)` uses the factory registered for `cls` when there is one.
Otherwise it reads the constructor signature and fills every parameter from the
service or factory registered for its annotation, falling back to the
parameter's default.

Example:
    factory = CommandFactory()
    factory.add_service(Database, db)
    command = factory.create(ReportCommand)  # ReportCommand(db: Database)
"""
from __future__ import annotations

import inspect
from typing import Any, Callable, get_type_hints

from conframe.exceptions import DependencyError
from conframe.logger import logger


class CommandFactory:
    """Creates instances with their constructor dependencies satisfied."""

    def __init__(self) -> None:
        self._services: dict[Any, Any] = {}
        self._factories: dict[Any, Callable[[CommandFactory], Any]] = {}
        self.add_service(CommandFactory, self)

    def add_service(self, key: Any, instance: Any) -> None:
        """Register a shared instance returned for every request of `key`."""
        self._services[key] = instance

    def add_factory(self, key: Any, factory: Callable[[CommandFactory], Any]) -> None:
        """Register a callable building a fresh instance of `key` on each request."""
        if not callable(factory):
            raise DependencyError(f"Factory for {key!r} must be callable")
        self._factories[key] = factory

    def has(self, key: Any) -> bool:
        return key in self._services or key in self._factories

    def get(self, key: Any) -> Any:
        """Return the service for `key`, building it when a factory is registered."""
        if key in self._services:
            return self._services[key]
        if key in self._factories:
            return self._factories[key](self)
        raise DependencyError(f"No service or factory registered for {key!r}")

    def create(self, cls: type) -> Any:
        """Build a new instance of `cls`."""
        if cls in self._factories:
            return self._factories[cls](self)
        return self._construct(cls)

    def _construct(self, cls: type) -> Any:
        init = cls.__init__  # type: ignore[misc]
        if init is object.__init__:
            return cls()

        try:
            hints = get_type_hints(init)
        except NameError:
            logger.debug("Could not resolve annotations of %s.__init__", cls.__name__)
            hints = {}

        kwargs: dict[str, Any] = {}
        parameters = list(inspect.signature(init).parameters.values())[1:]
        for parameter in parameters:
            if parameter.kind in (
                inspect.Parameter.VAR_POSITIONAL,
                inspect.Parameter.VAR_KEYWORD,
            ):
                continue
            annotation = hints.get(parameter.name, parameter.annotation)
            if annotation is not inspect.Parameter.empty and self.has(annotation):
                kwargs[parameter.name] = self.get(annotation)
            elif parameter.default is not inspect.Parameter.empty:
                continue
            else:
                raise DependencyError(
                    f"Cannot resolve parameter '{parameter.name}' of "
                    f"{cls.__qualname__}: nothing registered for {annotation!r}"
                )
        return cls(**kwargs)
