"""Controllers invoked through ControllerMiddleware in tests."""

import time

from switchyard import Request, Response


class Foo:
    def bar(self, request: Request) -> Response:
        return Response()


class CountingController:
    instances = 0

    def __init__(self) -> None:
        CountingController.instances += 1

    def show(self, request: Request) -> Response:
        response = Response()
        response.body.write(f"shown {request.path}")
        return response


class AsyncController:
    async def show(self, request: Request) -> Response:
        response = Response(status_code=201)
        response.body.write("async")
        return response


class GreetingController:
    def __init__(self, greeting: str):
        self.greeting = greeting

    def greet(self, request: Request) -> Response:
        response = Response()
        response.body.write(f"{self.greeting}, {request.get_attribute('name', 'world')}")
        return response

    not_callable = "greet"


class SlowController:
    """Counts instances and takes a while to construct."""

    instances = 0

    def __init__(self) -> None:
        time.sleep(0.05)
        SlowController.instances += 1

    def show(self, request: Request) -> Response:
        response = Response()
        response.body.write("slow")
        return response


class ClassLevelController:
    """Controller used as a class, without instances."""

    @classmethod
    def show(cls, request: Request) -> Response:
        response = Response()
        response.body.write("class level")
        return response
