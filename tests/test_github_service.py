import asyncio
import unittest
from dataclasses import replace
from unittest.mock import patch

import httpx
from fastapi import HTTPException

from devconnector.core.settings import S
from devconnector.services import github

_REAL_ASYNC_CLIENT = httpx.AsyncClient


def run_async(coro):
    return asyncio.run(coro)


class TestFetchRepositories(unittest.TestCase):
    def setUp(self):
        self.requests = []

    def mock_github(self, handler):
        def recording(request):
            self.requests.append(request)
            return handler(request)

        transport = httpx.MockTransport(recording)
        return patch.object(
            github.httpx,
            "AsyncClient",
            lambda **kwargs: _REAL_ASYNC_CLIENT(transport=transport, **kwargs),
        )

    def test_success_passes_body_through(self):
        with self.mock_github(lambda request: httpx.Response(200, json=[{"id": 1}])):
            repos = run_async(github.fetch_repositories("octocat"))
        self.assertEqual(repos, [{"id": 1}])

    def test_request_shape(self):
        settings = replace(S, github_client_id="cid", github_client_secret="secret")
        with patch.object(github, "S", settings):
            with self.mock_github(lambda request: httpx.Response(200, json=[])):
                run_async(github.fetch_repositories("octocat"))

        request = self.requests[0]
        self.assertEqual(request.method, "GET")
        self.assertEqual(request.url.path, "/users/octocat/repos")
        self.assertEqual(request.url.params["per_page"], "5")
        self.assertEqual(request.url.params["sort"], "created:asc")
        self.assertEqual(request.url.params["client_id"], "cid")
        self.assertEqual(request.url.params["client_secret"], "secret")
        self.assertEqual(request.headers["user-agent"], settings.github_user_agent)

    def test_credentials_omitted_when_not_configured(self):
        settings = replace(S, github_client_id="", github_client_secret="")
        with patch.object(github, "S", settings):
            with self.mock_github(lambda request: httpx.Response(200, json=[])):
                run_async(github.fetch_repositories("octocat"))
        self.assertNotIn("client_id", self.requests[0].url.params)

    def test_non_200_is_no_github_profile(self):
        with self.mock_github(lambda request: httpx.Response(404, json={"message": "Not Found"})):
            with self.assertRaises(HTTPException) as ctx:
                run_async(github.fetch_repositories("octocat"))
        self.assertEqual(ctx.exception.status_code, 404)
        self.assertEqual(ctx.exception.detail, "No Github profile found")

    def test_transport_failure_is_unavailable(self):
        def boom(request):
            raise httpx.ConnectError("connection refused", request=request)

        with self.mock_github(boom):
            with self.assertRaises(HTTPException) as ctx:
                run_async(github.fetch_repositories("octocat"))
        self.assertEqual(ctx.exception.status_code, 503)

    def test_timeout_is_unavailable(self):
        def slow(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with self.mock_github(slow):
            with self.assertRaises(HTTPException) as ctx:
                run_async(github.fetch_repositories("octocat"))
        self.assertEqual(ctx.exception.status_code, 503)

    def test_non_json_body_is_unavailable(self):
        with self.mock_github(lambda request: httpx.Response(200, text="<html>")):
            with self.assertRaises(HTTPException) as ctx:
                run_async(github.fetch_repositories("octocat"))
        self.assertEqual(ctx.exception.status_code, 503)

    def test_invalid_login_skips_network(self):
        with self.mock_github(lambda request: httpx.Response(200, json=[])):
            with self.assertRaises(HTTPException) as ctx:
                run_async(github.fetch_repositories("../admin"))
        self.assertEqual(ctx.exception.status_code, 404)
        self.assertEqual(self.requests, [])
