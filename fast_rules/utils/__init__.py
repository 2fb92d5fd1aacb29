from .path_utils import interpolate_path, interpolate_namespace
from .serialisation import pascal_case

__all__ = [
    "interpolate_path",
    "interpolate_namespace",
    "pascal_case",
]
