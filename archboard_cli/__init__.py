"""ArchBoard CLI: turn a source directory into an architecture diagram on a whiteboard."""

__version__ = "0.3.0"
