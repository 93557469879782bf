import pytest

from switchyard import Response
from switchyard.utils import get_status_code, load_type


class HttpError(Exception):
    def __init__(self, status_code):
        super().__init__("http error")
        self.status_code = status_code


class CodedError(Exception):
    def __init__(self, code):
        super().__init__("coded error")
        self.code = code


@pytest.mark.parametrize(
    "error, response, expected",
    [
        (HttpError(404), Response(), 404),
        (CodedError(503), Response(), 503),
        (HttpError(200), Response(status_code=422), 422),
        (CodedError(True), Response(), 500),
        (CodedError("404"), Response(), 500),
        (RuntimeError("boom"), Response(status_code=418), 418),
        (RuntimeError("boom"), Response(status_code=302), 500),
        (RuntimeError("boom"), Response(), 500),
    ],
)
def test_get_status_code(error, response, expected):
    assert get_status_code(error, response) == expected


def test_load_type():
    assert load_type("switchyard.http.Response") is Response


@pytest.mark.parametrize(
    "name",
    [
        "Response",
        "switchyard.http.Missing",
        "switchyard.nowhere.Response",
        "switchyard.http.HTTPStatus.OK",
        "switchyard.keys.CONFIG",
    ],
)
def test_load_type_rejects_invalid_names(name):
    with pytest.raises(ImportError):
        load_type(name)
