"""Runtime utilities shared by the zscanner API handlers."""
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("zscanner-api-core")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"
