"""Dependency injection container.

This module provides a simple DI container without external frameworks.
It is the one place that reads configuration and builds the client:
the credential is read once and handed to the client, which never
looks at configuration itself.

Design principles:
1. No magic - explicit registration and resolution
2. Testable - easy to swap implementations
3. Lazy loading - adapters instantiated on first use
4. Thread-safe - for web server contexts
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .config import AppConfig, get_config


@dataclass
class Container:
    """Dependency injection container.

    Usage:
        # Production
        container = Container.create_default()
        client = container.resolve(GeocoderPort)

        # Testing
        container = Container()
        container.register(HttpTransportPort, lambda: StaticTransport.json_reply([]))
        transport = container.resolve(HttpTransportPort)

    Attributes:
        config: Application configuration
    """

    config: AppConfig = field(default_factory=get_config)

    _factories: Dict[type[Any], Callable[[], Any]] = field(
        default_factory=dict, repr=False
    )
    _singletons: Dict[type[Any], Any] = field(default_factory=dict, repr=False)
    _singleton_types: set[type[Any]] = field(default_factory=set, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(
        self,
        port_type: type[Any],
        factory: Callable[[], Any],
        singleton: bool = True,
    ) -> None:
        """Register a factory for a port type.

        Args:
            port_type: The type (usually a Protocol) to register.
            factory: A callable that creates instances of the type.
            singleton: If True, only one instance is created.
        """
        with self._lock:
            self._factories[port_type] = factory
            self._singletons.pop(port_type, None)
            if singleton:
                self._singleton_types.add(port_type)
            else:
                self._singleton_types.discard(port_type)

    def resolve(self, port_type: type[Any]) -> Any:
        """Resolve an instance of a port type.

        Raises:
            KeyError: If the type is not registered.
        """
        with self._lock:
            if port_type not in self._factories:
                raise KeyError(f"Type not registered: {port_type}")

            if port_type in self._singleton_types:
                if port_type not in self._singletons:
                    self._singletons[port_type] = self._factories[port_type]()
                return self._singletons[port_type]

            return self._factories[port_type]()

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Create a container with default production bindings.

        The client itself is built lazily, so a missing API key only
        raises ConfigurationError when the client is first resolved.

        Args:
            config: Optional configuration override.

        Returns:
            A configured Container instance.
        """
        from .adapters.geocoding import MapsCoResponseDecoder
        from .adapters.transport import RequestsTransport
        from .ports.geocoding import GeocoderPort
        from .ports.transport import HttpTransportPort
        from .services import GeocodingClient

        config = config or get_config()
        container = cls(config=config)

        container.register(
            HttpTransportPort,
            lambda: RequestsTransport.from_config(config.geocoding),
        )
        container.register(MapsCoResponseDecoder, MapsCoResponseDecoder)

        def create_client() -> GeocodingClient:
            return GeocodingClient(
                api_key=config.geocoding.api_key.get_secret_value(),
                transport=container.resolve(HttpTransportPort),
                decoder=container.resolve(MapsCoResponseDecoder),
                language=config.geocoding.language,
            )

        container.register(GeocodingClient, create_client)
        container.register(GeocoderPort, lambda: container.resolve(GeocodingClient))

        return container

