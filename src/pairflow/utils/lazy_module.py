import importlib
from types import ModuleType
from typing import Any


class LazyModule:
    """
    Stand-in for a third-party module that is imported on first attribute access.

    pairflow only needs pyarrow, polars and pandas when a stream is built from
    or materialized into a columnar structure, so those imports are deferred.

    Example:
        pa = LazyModule("pyarrow")
        pa.array([1, 2, 3])  # pyarrow is imported here
    """

    def __init__(self, module_name: str, package: str | None = None):
        self._module_name = module_name
        self._package = package
        self._module: ModuleType | None = None

    @property
    def is_loaded(self) -> bool:
        return self._module is not None

    def load(self) -> ModuleType:
        """Import the wrapped module (once) and return it."""
        if self._module is None:
            self._module = importlib.import_module(self._module_name, self._package)
        return self._module

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            # internal attributes never resolve through the wrapped module
            raise AttributeError(
                f"'{self.__class__.__name__}' object has no attribute '{name}'"
            )
        return getattr(self.load(), name)

    def __dir__(self) -> list[str]:
        if self._module is None:
            return []
        return dir(self._module)

    def __repr__(self) -> str:
        state = "loaded" if self.is_loaded else "not loaded"
        return f"<LazyModule '{self._module_name}' ({state})>"
