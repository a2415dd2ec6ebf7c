"""Mesh building, primitive generation, OBJ and primitive-file loading, transforms and process statistics."""

__version__ = "0.1.0"