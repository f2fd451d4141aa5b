"""Economy state and ban list storage for a chat bot."""

__version__ = "1.0.0"
