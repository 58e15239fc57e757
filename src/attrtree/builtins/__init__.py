"""Built-in plugins shipped with attrtree."""

from .required import required

__all__ = (
    'required',
)
