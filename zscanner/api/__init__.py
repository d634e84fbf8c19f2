"""HTTP-facing helpers: request contexts and error containment for handlers."""
from .context import HttpContext, RequestContext, ResponseState
from .errors import as_endpoint, describe_error, wrap_route_with_error_handler

__all__ = [
    "HttpContext",
    "RequestContext",
    "ResponseState",
    "as_endpoint",
    "describe_error",
    "wrap_route_with_error_handler",
]
