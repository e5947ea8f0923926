"""Built-in version management for UVM."""

from .errors import UVMError
from .versions import VersionManager

__all__ = ["UVMError", "VersionManager"]
