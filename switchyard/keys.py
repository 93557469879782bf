"""Container keys the factories look services up under.

Each service has a canonical key, the type it is registered as. Releases
before 1.0 registered services under plain string names; those are still
honored after the canonical key and are listed last in each tuple.
"""

from .emitter import Emitter
from .http import Response
from .middleware import DispatchMiddleware, ErrorResponseGenerator, RouteMiddleware
from .router import Router
from .template import TemplateRenderer

CONFIG = "config"

DEFAULT_HANDLER = "switchyard.default_handler"

# A Response instance, or a callable returning one
RESPONSE = Response

ROUTER = (Router, "router")
EMITTER = (Emitter, "emitter")
ROUTE_MIDDLEWARE = (RouteMiddleware, "route_middleware")
DISPATCH_MIDDLEWARE = (DispatchMiddleware, "dispatch_middleware")
TEMPLATE_RENDERER = (TemplateRenderer, "template_renderer")
ERROR_RESPONSE_GENERATOR = (ErrorResponseGenerator, "error_response_generator")
