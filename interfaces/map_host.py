"""
Map Host Interface

Defines the contract for the map-rendering engine the utilities drive.
MapUtils never renders, fetches tiles, or dispatches events itself; it
only forwards well-formed layer, source and property calls to an
implementation of this interface.

Error reporting is the host's business: a rejected call (e.g. removing
a layer that is not in the style) is delivered to listeners registered
with on("error", listener) as a mapping {"error": {"message": str}}.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict


class ISourceHandle(ABC):
    """Live source object returned by IMapHost.get_source()."""

    @abstractmethod
    def set_data(self, data: Any) -> None:
        """Replace the source data in place."""
        pass


class IMapHost(ABC):
    """
    Interface for the host map.

    Implementations wrap a concrete rendering engine (a widget bridge,
    a headless renderer, a test double).
    """

    # ------------------------------------------------------------------
    # Style registry
    # ------------------------------------------------------------------

    @abstractmethod
    def add_layer(self, layer: Dict[str, Any]) -> None:
        """
        Register a fully shaped layer object.

        Args:
            layer: Layer dict with id, type, source and optional paint/layout
        """
        pass

    @abstractmethod
    def remove_layer(self, layer_id: str) -> None:
        """
        Remove a layer.

        Reports an 'error' event if the layer does not exist.
        """
        pass

    @abstractmethod
    def add_source(self, source_id: str, spec: Dict[str, Any]) -> None:
        """Register a source under source_id."""
        pass

    @abstractmethod
    def remove_source(self, source_id: str) -> None:
        """
        Remove a source.

        Reports an 'error' event if the source does not exist.
        """
        pass

    @abstractmethod
    def get_source(self, source_id: str) -> ISourceHandle:
        """Return the live source registered under source_id."""
        pass

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @abstractmethod
    def set_paint_property(self, layer_id: str, name: str, value: Any) -> None:
        """Set a paint property (kebab-case name) on a layer."""
        pass

    @abstractmethod
    def set_layout_property(self, layer_id: str, name: str, value: Any) -> None:
        """Set a layout property (kebab-case name) on a layer."""
        pass

    @abstractmethod
    def set_filter(self, layer_id: str, filter_expression: Any) -> None:
        """Set the filter expression on a layer."""
        pass

    # ------------------------------------------------------------------
    # Lifecycle and events
    # ------------------------------------------------------------------

    @abstractmethod
    def loaded(self) -> bool:
        """True once the style has finished loading."""
        pass

    @abstractmethod
    def once(self, event: str, listener: Callable[..., Any]) -> None:
        """Run listener on the next occurrence of event only."""
        pass

    @abstractmethod
    def on(self, event: str, listener: Callable[..., Any]) -> None:
        """Subscribe listener to event."""
        pass

    @abstractmethod
    def off(self, event: str, listener: Callable[..., Any]) -> None:
        """Unsubscribe listener from event."""
        pass
