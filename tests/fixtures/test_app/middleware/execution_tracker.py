"""Execution tracking middleware for testing."""

from switchyard import Middleware, Request, RequestHandler, Response


class ExecutionTracker(Middleware):
    def __init__(self, name: str = "tracker") -> None:
        self.name = name
        self.executions: list[tuple[str, str]] = []

    async def process(self, request: Request, handler: RequestHandler) -> Response:
        self.executions.append(("start", self.name))
        response = await handler.handle(request)
        self.executions.append(("end", self.name))
        return response
