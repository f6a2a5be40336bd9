"""API layer for tween computation.

This module provides the service class host applications talk to. It
wraps the pure engine with a frame memo and routes binding edits through
the caller's BindingStore.

Example usage:
    Tween a frame::

        from tween_lib.api import TweenService

        service = TweenService()
        strokes = service.tween(5, key0, key10)
"""

from .services import TweenService

__all__ = ['TweenService']
