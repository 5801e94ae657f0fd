from tablestyle.host.base import AttributeSink, GridAccessor
from tablestyle.host.memory import InMemoryGrid, Marker, MarkerStore

__all__ = ["AttributeSink", "GridAccessor", "InMemoryGrid", "Marker", "MarkerStore"]
