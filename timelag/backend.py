from typing import Callable, Dict, List

# Kernels a backend has to provide to be usable by the builders
REQUIRED_FUNCTIONS = ("lag_rows_core",)

_BACKENDS: Dict[str, Dict[str, Callable]] = {}


def register_backend(name: str, functions: Dict[str, Callable]) -> None:
    """
    Make a set of lag kernels available under ``name``.

    Registering a name twice replaces the earlier kernels.

    Parameters
    ----------
    name : str
        Backend name passed as ``backend=`` to the builders.
    functions : Dict[str, Callable]
        Kernel name to implementation; must contain every entry of
        ``REQUIRED_FUNCTIONS``.

    Raises
    ------
    ValueError
        If a required kernel is missing or not callable.
    """
    missing = [kernel for kernel in REQUIRED_FUNCTIONS if not callable(functions.get(kernel))]
    if missing:
        raise ValueError(f"Backend '{name}' is missing kernels: {', '.join(missing)}")
    _BACKENDS[name] = dict(functions)


def unregister_backend(name: str) -> None:
    if name not in _BACKENDS:
        raise ValueError(f"Backend '{name}' not registered")
    del _BACKENDS[name]


def available_backends() -> List[str]:
    return sorted(_BACKENDS)


def get_backend_function(backend_name: str, function_name: str) -> Callable:
    """
    Look up one kernel of a registered backend.

    Raises
    ------
    ValueError
        If the backend or the kernel is unknown.
    """
    if backend_name not in _BACKENDS:
        raise ValueError(f"Backend '{backend_name}' not registered")

    kernels = _BACKENDS[backend_name]
    if function_name not in kernels:
        raise ValueError(f"Function '{function_name}' not found in backend '{backend_name}'")
    return kernels[function_name]


class LagBackend:
    """
    Kernels of one registered backend, exposed as attributes.

    The kernel table is bound when the object is created, so a builder keeps
    its kernels even if the backend is re-registered afterwards.
    """

    def __init__(self, backend: str = "numba"):
        if backend not in _BACKENDS:
            raise ValueError(f"Backend '{backend}' not registered")

        self.backend = backend
        self._kernels = _BACKENDS[backend]

    def __getattr__(self, function_name: str) -> Callable:
        if function_name.startswith("_"):
            raise AttributeError(function_name)
        if function_name in self._kernels:
            return self._kernels[function_name]
        raise AttributeError(f"Function '{function_name}' not found in backend '{self.backend}'")
