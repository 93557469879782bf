import io

from switchyard import Request, Response, StreamEmitter


def test_request_normalizes_method_and_splits_uri():
    request = Request("post", "/search?q=switch")

    assert request.method == "POST"
    assert request.path == "/search"
    assert request.query == "q=switch"


def test_with_attribute_leaves_original_untouched(request_):
    updated = request_.with_attribute("user", 42)

    assert updated.get_attribute("user") == 42
    assert request_.get_attribute("user") is None


def test_header_lookups_are_case_insensitive():
    response = Response(headers={"Content-Type": "text/plain"}).with_header("content-type", "text/html")

    assert response.headers == {"content-type": "text/html"}
    assert response.get_header("CONTENT-TYPE") == "text/html"
    assert Request(headers={"Accept": "*/*"}).get_header("accept") == "*/*"


def test_with_status_shares_body():
    response = Response()
    response.body.write("partial")

    assert response.with_status(404).body is response.body


def test_clone_starts_with_empty_body():
    response = Response(status_code=201, headers={"X-Id": "1"})
    response.body.write("content")

    clone = response.clone()

    assert clone.status_code == 201
    assert clone.get_header("X-Id") == "1"
    assert clone.body.getvalue() == ""
    assert response.body.getvalue() == "content"


def test_reason_phrase():
    assert Response(status_code=404).reason_phrase == "Not Found"
    assert Response().with_status(499, "Client Closed").reason_phrase == "Client Closed"
    assert Response(status_code=599).reason_phrase == ""


def test_stream_emitter_writes_status_headers_and_body():
    stream = io.StringIO()
    response = Response(status_code=201, headers={"X-Id": "1"})
    response.body.write("created")

    assert StreamEmitter(stream).emit(response) is True
    assert stream.getvalue() == "HTTP/1.1 201 Created\r\nX-Id: 1\r\n\r\ncreated"
