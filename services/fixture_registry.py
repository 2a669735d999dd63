"""
Explicit fixture registry with per-test scoped acquisition.

A registry maps fixture names to providers. A provider is either a plain
callable returning the value, or a generator function that yields the value
once and performs its release after the yield, the same shape pytest uses for
yield fixtures. Providers receive their dependencies as keyword arguments.

Each test opens its own FixtureScope. The scope resolves the dependency graph
on demand, memoizes every value for the lifetime of the test and releases
generator fixtures in reverse acquisition order when it is closed.
"""

import inspect
import logging
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from services.data_provider import DataProvider

logger = logging.getLogger(__name__)


class FixtureState(Enum):
    UNREQUESTED = 'unrequested'
    ACQUIRING = 'acquiring'
    READY = 'ready'
    RELEASING = 'releasing'
    RELEASED = 'released'


class FixtureError(Exception):
    """Base class for fixture resolution failures."""
    pass


class UnknownFixtureError(FixtureError, LookupError):
    """Raised when a fixture name has no registered provider."""
    pass


class FixtureCycleError(FixtureError):
    """Raised when fixtures depend on each other in a loop."""

    def __init__(self, path):
        self.path = list(path)
        super().__init__(f"Fixture dependency cycle: {' -> '.join(self.path)}")


class MissingFixtureRecordError(FixtureError, LookupError):
    """Raised when a required fixture record matches no loaded data."""

    def __init__(self, description, criteria):
        self.description = description
        self.criteria = dict(criteria)
        wanted = ', '.join(f"{key}={value!r}" for key, value in self.criteria.items())
        super().__init__(f"No {description} found in test data (criteria: {wanted})")


def require_record(records, description, **criteria):
    """
    Return the first record matching every criterion.

    Args:
        records: Loaded records to search
        description: Human readable name of the wanted record, used in the error
        **criteria: Field values that must match by equality

    Raises:
        MissingFixtureRecordError: If no record matches
    """
    matches = DataProvider.filter_data(records, criteria)
    if not matches:
        raise MissingFixtureRecordError(description, criteria)
    return matches[0]


class FixtureDefinition:
    """A named provider and the names of the fixtures it depends on."""

    def __init__(self, name: str, provider: Callable, depends_on: Optional[Iterable[str]] = None):
        self.name = name
        self.provider = provider
        if depends_on is None:
            depends_on = inspect.signature(provider).parameters.keys()
        self.depends_on: Tuple[str, ...] = tuple(depends_on)
        self.is_generator = inspect.isgeneratorfunction(provider)

    def __repr__(self):
        return f"FixtureDefinition({self.name!r}, depends_on={self.depends_on!r})"


class FixtureRegistry:
    """Mapping of fixture names to providers, optionally layered on a parent."""

    def __init__(self, parent: Optional['FixtureRegistry'] = None):
        self.parent = parent
        self._definitions: Dict[str, FixtureDefinition] = {}

    def add(self, name: str, provider: Callable, depends_on: Optional[Iterable[str]] = None) -> FixtureDefinition:
        """Register a provider; a later registration of the same name replaces it."""
        definition = FixtureDefinition(name, provider, depends_on)
        self._definitions[name] = definition
        logger.debug(f"Registered fixture {definition!r}")
        return definition

    def fixture(self, name: Optional[str] = None, depends_on: Optional[Iterable[str]] = None):
        """Decorator form of add(); the function name is the default fixture name."""
        def decorator(provider):
            self.add(name or provider.__name__, provider, depends_on)
            return provider
        return decorator

    def extend(self) -> 'FixtureRegistry':
        """Create a child registry whose definitions shadow this one's."""
        return FixtureRegistry(parent=self)

    def get_definition(self, name: str) -> FixtureDefinition:
        if name in self._definitions:
            return self._definitions[name]
        if self.parent is not None:
            return self.parent.get_definition(name)
        raise UnknownFixtureError(f"Unknown fixture: {name!r}")

    def __contains__(self, name):
        try:
            self.get_definition(name)
        except UnknownFixtureError:
            return False
        return True

    def names(self) -> List[str]:
        """All fixture names visible from this registry."""
        names = set(self._definitions)
        if self.parent is not None:
            names.update(self.parent.names())
        return sorted(names)

    def open_scope(self, **values) -> 'FixtureScope':
        """Start a per-test scope; keyword values are pre-resolved fixtures."""
        return FixtureScope(self, values)


class FixtureScope:
    """Resolution context for a single test."""

    def __init__(self, registry: FixtureRegistry, values: Optional[Dict[str, Any]] = None):
        self.registry = registry
        self._values: Dict[str, Any] = {}
        self._states: Dict[str, FixtureState] = {}
        self._teardowns: List[Tuple[str, Any]] = []
        self._resolving: List[str] = []
        self.closed = False

        for name, value in (values or {}).items():
            self._values[name] = value
            self._states[name] = FixtureState.READY

    def state(self, name: str) -> FixtureState:
        return self._states.get(name, FixtureState.UNREQUESTED)

    def get(self, name: str) -> Any:
        """Resolve a fixture, acquiring its dependencies first."""
        if self.closed:
            raise FixtureError(f"Cannot resolve {name!r}: fixture scope already closed")

        state = self.state(name)
        if state == FixtureState.READY:
            return self._values[name]
        if state == FixtureState.ACQUIRING:
            raise FixtureCycleError(self._resolving[self._resolving.index(name):] + [name])
        if state in (FixtureState.RELEASING, FixtureState.RELEASED):
            raise FixtureError(f"Fixture {name!r} has already been released")

        definition = self.registry.get_definition(name)
        self._states[name] = FixtureState.ACQUIRING
        self._resolving.append(name)
        try:
            kwargs = {dependency: self.get(dependency) for dependency in definition.depends_on}
            value = self._acquire(definition, kwargs)
        except BaseException:
            self._states.pop(name, None)
            raise
        finally:
            self._resolving.pop()

        self._values[name] = value
        self._states[name] = FixtureState.READY
        logger.debug(f"Fixture {name!r} ready")
        return value

    def _acquire(self, definition: FixtureDefinition, kwargs: Dict[str, Any]) -> Any:
        if not definition.is_generator:
            return definition.provider(**kwargs)

        generator = definition.provider(**kwargs)
        try:
            value = next(generator)
        except StopIteration:
            raise FixtureError(f"Fixture {definition.name!r} did not yield a value")
        self._teardowns.append((definition.name, generator))
        return value

    def close(self):
        """
        Release acquired fixtures in reverse acquisition order.

        Every fixture is released even when an earlier release fails; the
        first release error is re-raised once all of them have run.
        """
        if self.closed:
            return
        self.closed = True

        first_error = None
        while self._teardowns:
            name, generator = self._teardowns.pop()
            self._states[name] = FixtureState.RELEASING
            try:
                next(generator)
            except StopIteration:
                pass
            except Exception as e:
                logger.error(f"Error releasing fixture {name!r}: {e}")
                if first_error is None:
                    first_error = e
            else:
                logger.warning(f"Fixture {name!r} yielded more than once; closing it")
                generator.close()
            self._states[name] = FixtureState.RELEASED

        for name, state in self._states.items():
            if state == FixtureState.READY:
                self._states[name] = FixtureState.RELEASED

        if first_error is not None:
            raise first_error

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
