"""Wiring for the transit map.

``Container.create_default`` binds the Google directions adapter, the
fetcher, the route renderer and a fresh Folium surface per screen.
Tests swap the provider with ``register`` and build screens with
``create_screen``. Registration and lookup hold a lock so a Gradio
worker thread and the event loop can share one container.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .config import AppConfig, get_config


@dataclass
class _Binding:
    """How one type is built, plus its instance once a shared one exists."""

    factory: Callable[[], Any]
    shared: bool
    instance: Any = None
    built: bool = False


@dataclass
class Container:
    """Type-keyed bindings for the transit map services.

    Usage:
        container = Container.create_default()
        container.register(DirectionsProviderPort, lambda: StubProvider())
        screen = container.create_screen(query, InMemoryMapSurface())

    Attributes:
        config: Application configuration the default bindings read
    """

    config: AppConfig = field(default_factory=get_config)

    _bindings: Dict[type[Any], _Binding] = field(default_factory=dict, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(
        self,
        key: type[Any],
        factory: Callable[[], Any],
        singleton: bool = True,
    ) -> None:
        """Bind ``key`` to a factory, replacing any earlier binding.

        Args:
            key: Port or service type the factory builds.
            factory: Zero-argument callable returning an instance.
            singleton: Share one instance instead of building per lookup.
        """
        with self._lock:
            self._bindings[key] = _Binding(factory=factory, shared=singleton)

    def resolve(self, key: type[Any]) -> Any:
        """Return the instance bound to ``key``.

        Raises:
            KeyError: If nothing is bound to ``key``.
        """
        with self._lock:
            binding = self._bindings.get(key)
            if binding is None:
                raise KeyError(f"No binding for {key.__name__}")
            if not binding.shared:
                return binding.factory()
            if not binding.built:
                binding.instance = binding.factory()
                binding.built = True
            return binding.instance

    def is_registered(self, key: type[Any]) -> bool:
        return key in self._bindings

    def clear_singletons(self) -> None:
        """Forget shared instances; the next lookup rebuilds them."""
        with self._lock:
            for binding in self._bindings.values():
                binding.instance = None
                binding.built = False

    def clear_all(self) -> None:
        with self._lock:
            self._bindings.clear()

    def create_screen(self, query: Any, surface: Any) -> Any:
        """Build a TransitScreen for a query, drawing on the given surface.

        The caller keeps the surface alive; the screen only holds it weakly.
        """
        from .services import DirectionsFetcher, RouteRenderer, TransitScreen

        return TransitScreen(
            query=query,
            fetcher=self.resolve(DirectionsFetcher),
            renderer=self.resolve(RouteRenderer),
            surface=surface,
        )

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Create a container with default production bindings.

        Args:
            config: Optional configuration override.

        Returns:
            A configured Container instance.
        """
        from .adapters.directions import GoogleDirectionsAdapter
        from .adapters.surface import FoliumMapSurface
        from .ports.directions import DirectionsProviderPort
        from .ports.surface import MapSurfacePort
        from .services import DirectionsFetcher, RouteRenderer

        config = config or get_config()
        container = cls(config=config)

        # Directions
        container.register(
            DirectionsProviderPort,
            lambda: GoogleDirectionsAdapter(config.directions),
        )
        container.register(
            DirectionsFetcher,
            lambda: DirectionsFetcher(container.resolve(DirectionsProviderPort)),
        )

        # Rendering; one surface per screen
        container.register(
            MapSurfacePort,
            lambda: FoliumMapSurface(config.map),
            singleton=False,
        )
        container.register(
            RouteRenderer,
            lambda: RouteRenderer(config.map),
        )

        return container


_shared: Optional[Container] = None
_shared_lock = threading.Lock()


def get_container() -> Container:
    """Return the process-wide container, built from ``get_config()`` on first use."""
    global _shared
    with _shared_lock:
        if _shared is None:
            _shared = Container.create_default()
        return _shared


def reset_container() -> None:
    """Drop the process-wide container; the next ``get_container`` rebuilds it."""
    global _shared
    with _shared_lock:
        if _shared is not None:
            _shared.clear_all()
        _shared = None
