"""Content Hub - Curriculum content management backend."""

__version__ = "0.1.0"
