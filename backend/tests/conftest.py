"""Shared fixtures for the signed URL action tests"""

import httpx
import pytest

from url_signer.agents.fetchers import HttpxProber
from url_signer.services.domain_policy import parse_whitelist


class RecordingUpstream:
    """Fake upstream that records every HEAD request and answers per host"""

    def __init__(self):
        self.requests = []
        self.routes = {}

    def route(self, url, *responses):
        self.routes[url] = list(responses)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        responses = self.routes.get(str(request.url))
        if not responses:
            return httpx.Response(200)
        result = responses.pop(0) if len(responses) > 1 else responses[0]
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def upstream():
    return RecordingUpstream()


@pytest.fixture
def make_prober(upstream):
    def _make():
        return HttpxProber(timeout=5, transport=httpx.MockTransport(upstream))

    return _make


@pytest.fixture
def whitelist():
    return parse_whitelist("acme.com")
