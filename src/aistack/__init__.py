"""aistack - local AI stack orchestration tools."""

__version__ = "1.0.0"
