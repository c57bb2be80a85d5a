"""
Tests for the GitHub image host
"""

import base64
import json

import httpx
import pytest

from app.core.errors import InvalidArgument, StoreUnavailable
from app.services.image_host import GitHubImageHost, check_image, strip_data_url

def make_host(handler):
    return GitHubImageHost(
        token="t0ken",
        owner="octo",
        repo="assets",
        branch="main",
        transport=httpx.MockTransport(handler),
    )

def test_strip_data_url():
    """Test data-URL prefixes are removed"""
    assert strip_data_url("data:image/png;base64,QUJD") == "QUJD"
    assert strip_data_url("QUJD") == "QUJD"

def test_upload_image():
    """Test the commit request and the returned raw URL"""
    seen = {}

    def handler(request):
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(201, json={"content": {"sha": "abc"}})

    content = "data:image/jpeg;base64," + base64.b64encode(b"img").decode()
    url = make_host(handler).upload_image("logo.jpg", content, "companies")

    assert url == "https://raw.githubusercontent.com/octo/assets/main/companies/logo.jpg"
    assert seen["method"] == "PUT"
    assert seen["path"] == "/repos/octo/assets/contents/companies/logo.jpg"
    assert seen["auth"] == "Bearer t0ken"
    assert seen["body"]["content"] == base64.b64encode(b"img").decode()
    assert seen["body"]["branch"] == "main"

def test_upload_failure_is_store_unavailable():
    """Test HTTP errors surface as StoreUnavailable"""
    host = make_host(lambda request: httpx.Response(422, json={"message": "sha wasn't supplied"}))

    with pytest.raises(StoreUnavailable):
        host.upload_image("logo.jpg", "QUJD")

def test_delete_file_looks_up_sha():
    """Test deletion fetches the blob sha and sends it back"""
    calls = []

    def handler(request):
        calls.append(request)
        if request.method == "GET":
            return httpx.Response(200, json={"sha": "deadbeef"})
        return httpx.Response(200, json={"commit": {}})

    assert make_host(handler).delete_file("events/banner.jpg")

    assert [c.method for c in calls] == ["GET", "DELETE"]
    assert json.loads(calls[1].content)["sha"] == "deadbeef"

def test_delete_missing_file():
    """Test a file that is already gone is not an error"""
    host = make_host(lambda request: httpx.Response(404, json={"message": "Not Found"}))
    assert host.delete_file("events/banner.jpg") is False

def test_path_from_url():
    """Test only URLs of this repository map back to paths"""
    host = make_host(lambda request: httpx.Response(200))

    assert host.path_from_url("https://raw.githubusercontent.com/octo/assets/main/events/a.jpg") == "events/a.jpg"
    assert host.path_from_url("https://example.com/a.jpg") is None

def test_delete_url():
    """Test URLs of this repository are deleted by path, foreign ones skipped"""
    calls = []

    def handler(request):
        calls.append(request)
        if request.method == "GET":
            return httpx.Response(200, json={"sha": "deadbeef"})
        return httpx.Response(200, json={"commit": {}})

    host = make_host(handler)

    assert host.delete_url("https://raw.githubusercontent.com/octo/assets/main/events/a.jpg")
    assert calls[0].url.path == "/repos/octo/assets/contents/events/a.jpg"
    assert host.delete_url("https://example.com/a.jpg") is False
    assert len(calls) == 2

def test_check_image():
    """Test the decoded size is measured, data-URL prefix included"""
    content = base64.b64encode(b"x" * 10).decode()

    assert check_image(content, max_size=10) == 10
    assert check_image(f"data:image/png;base64,{content}", max_size=10) == 10
    with pytest.raises(InvalidArgument):
        check_image(content, max_size=9)

def test_check_image_rejects_garbage():
    """Test non-base64 payloads are refused"""
    with pytest.raises(InvalidArgument):
        check_image("not base64!", max_size=1024)
