from typing import Any

from measura import _get_default_registry


def __getattr__(name: str) -> Any:
    """Accessing 'u' builds a namespace over the default registry."""
    if name == "u":
        return _get_default_registry().as_namespace()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + ["u"])
