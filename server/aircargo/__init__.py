"""Air cargo booking, tracking and itinerary search service."""

__version__ = "1.0.0"
