"""Root test configuration: a mock content resolution server shared by fetcher, controller and CLI tests"""

import httpx
import pytest

from hashview.core.fetch import ContentFetcher


BASE_URL = "http://content.test"

SAMPLE_CODE = "".join(f"line_{i} = {i}\n" for i in range(1, 11))

SAMPLE_MARKDOWN = """\
---
title: Release Notes
tags:
  - viewer
  - fragments
---
# Changes

Body text.
"""

# identifier -> (status, headers, body)
ARTIFACTS: dict[str, tuple[int, dict[str, str], bytes]] = {
    "img0": (200, {"content-type": "image/png", "content-disposition": 'inline; filename="cat.png"'}, b"\x89PNG\r\n"),
    "vid0": (200, {"content-type": "video/mp4"}, b"\x00\x00\x00\x18ftyp"),
    "pdf0": (200, {"content-type": "application/pdf", "content-disposition": 'attachment; filename="spec.pdf"'}, b"%PDF-1.7"),
    "md0": (200, {"content-type": "text/markdown; charset=utf-8", "content-disposition": 'inline; filename="NOTES.md"'},
            SAMPLE_MARKDOWN.encode()),
    "code0": (200, {"content-type": "text/plain; charset=utf-8", "content-disposition": 'inline; filename="main.py"'},
              SAMPLE_CODE.encode()),
    "txt0": (200, {"content-type": "application/octet-stream"}, b"plain words"),
    "bin0": (200, {"content-type": "application/octet-stream"}, b"\xff\xfe\x00\x01\x80"),
    "gone": (500, {}, b"boom"),
}


def content_handler(request: httpx.Request) -> httpx.Response:
    """Serve ARTIFACTS under /content/<identifier>; redirect the gateway-style /api/md5?hash=<id>."""
    if request.url.path == "/api/md5":
        identifier = request.url.params.get("hash", "")
        return httpx.Response(302, headers={"location": f"{BASE_URL}/content/{identifier}"})
    identifier = request.url.path.rsplit("/", 1)[-1]
    if identifier == "offline":
        raise httpx.ConnectError("connection refused", request=request)
    if identifier not in ARTIFACTS:
        return httpx.Response(404, text="not found")
    status, headers, body = ARTIFACTS[identifier]
    return httpx.Response(status, headers=headers, content=body)


@pytest.fixture(name="transport")
def transport_fixture():
    return httpx.MockTransport(content_handler)


@pytest.fixture(name="fetcher")
def fetcher_fixture(transport):
    """ContentFetcher bound to the mock server."""
    return ContentFetcher(BASE_URL, client=httpx.AsyncClient(transport=transport))


@pytest.fixture(name="sample_code")
def sample_code_fixture():
    return SAMPLE_CODE


@pytest.fixture(name="sample_markdown")
def sample_markdown_fixture():
    return SAMPLE_MARKDOWN
