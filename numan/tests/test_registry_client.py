"""
Unit tests for RegistryClient.

Tests cover:
- Request shape (method, headers, multipart field)
- Success and rejection responses
- Transport failures
"""

import io
import shutil
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

import httpx

from numan.exceptions import InputValidationError, UploadTransportError
from numan.registry_client import (
    API_KEY_HEADER,
    CLIENT_VERSION_HEADER,
    DEFAULT_REGISTRY_URL,
    RegistryClient,
    UploadResult,
)


class TestUploadResult(unittest.TestCase):
    """Test UploadResult dataclass."""

    def test_defaults(self):
        result = UploadResult(success=True, status_code=201)
        self.assertEqual(result.body, "")
        self.assertEqual(result.reason, "")


class TestRegistryClientInit(unittest.TestCase):
    """Test RegistryClient initialization."""

    def test_default_init(self):
        client = RegistryClient()
        self.assertTrue(client.registry_url.startswith("http"))
        self.assertIsNone(client.api_key)
        self.assertEqual(client.client_version, "4.1.0")
        self.assertIsNone(client.timeout)
        self.assertIsNone(client._client)

    def test_custom_init(self):
        client = RegistryClient(
            registry_url="http://localhost:5555/api/v2/package/",
            api_key="secret",
            timeout=60.0,
            show_progress=False,
        )
        self.assertEqual(client.registry_url, "http://localhost:5555/api/v2/package/")
        self.assertEqual(client.api_key, "secret")
        self.assertEqual(client.timeout, 60.0)
        self.assertFalse(client.show_progress)


class TestRegistryClientUpload(unittest.IsolatedAsyncioTestCase):
    """Test RegistryClient.upload against a mock transport."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.archive = Path(self.temp_dir) / "MyLib.1.2.0.nupkg"
        self.archive.write_bytes(b"PK\x03\x04 archive payload")
        self.requests = []

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def make_client(self, handler, **kwargs):
        def recording_handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        kwargs.setdefault("show_progress", False)
        return RegistryClient(transport=httpx.MockTransport(recording_handler), **kwargs)

    async def test_request_shape(self):
        """Test method, url, headers and multipart body of the upload."""
        client = self.make_client(lambda request: httpx.Response(201))

        async with client:
            await client.upload(self.archive, "secret-key")

        self.assertEqual(len(self.requests), 1)
        request = self.requests[0]
        self.assertEqual(request.method, "PUT")
        self.assertEqual(str(request.url), DEFAULT_REGISTRY_URL)
        self.assertEqual(request.headers[API_KEY_HEADER], "secret-key")
        self.assertEqual(request.headers[CLIENT_VERSION_HEADER], "4.1.0")
        self.assertTrue(request.headers["content-type"].startswith("multipart/form-data"))

        body = request.content
        self.assertIn(b'name=""; filename="MyLib.1.2.0.nupkg"', body)
        self.assertIn(b"PK\x03\x04 archive payload", body)

    async def test_success(self):
        client = self.make_client(lambda request: httpx.Response(201, text=""))

        async with client:
            result = await client.upload(self.archive, "key")

        self.assertTrue(result.success)
        self.assertEqual(result.status_code, 201)
        self.assertEqual(result.reason, "Created")

    async def test_rejected_upload_is_not_success(self):
        """Test non-2xx responses are returned, not raised."""
        client = self.make_client(
            lambda request: httpx.Response(409, text="A nupkg with that version already exists")
        )

        async with client:
            result = await client.upload(self.archive, "key")

        self.assertFalse(result.success)
        self.assertEqual(result.status_code, 409)
        self.assertEqual(result.reason, "Conflict")
        self.assertIn("already exists", result.body)

    async def test_default_api_key(self):
        client = self.make_client(lambda request: httpx.Response(200), api_key="stored")

        async with client:
            await client.upload(self.archive)

        self.assertEqual(self.requests[0].headers[API_KEY_HEADER], "stored")

    async def test_missing_api_key(self):
        """Test nothing is sent without an api key."""
        client = self.make_client(lambda request: httpx.Response(201))

        with self.assertRaises(InputValidationError) as ctx:
            await client.upload(self.archive)

        self.assertEqual(ctx.exception.exit_code, 4)
        self.assertEqual(self.requests, [])

    async def test_connection_error(self):
        """Test transport failures raise UploadTransportError."""
        def refuse(request):
            raise httpx.ConnectError("Connection refused", request=request)

        client = self.make_client(refuse)

        async with client:
            with self.assertRaises(UploadTransportError) as ctx:
                await client.upload(self.archive, "key")

        self.assertIn("Connection failed", ctx.exception.message)

    async def test_progress_line_outside_terminal(self):
        """Test the static progress line when stdout is not a terminal."""
        client = self.make_client(lambda request: httpx.Response(201), show_progress=True)
        out = io.StringIO()

        with redirect_stdout(out):
            async with client:
                await client.upload(self.archive, "key")

        text = out.getvalue()
        self.assertIn("MyLib.1.2.0.nupkg [---->---->---->]", text)
        self.assertNotIn("\b", text)


class TestRegistryClientClose(unittest.IsolatedAsyncioTestCase):
    """Test client lifecycle."""

    async def test_close_resets_client(self):
        client = RegistryClient(transport=httpx.MockTransport(lambda request: httpx.Response(200)))
        http_client = await client._get_client()
        self.assertFalse(http_client.is_closed)

        await client.close()

        self.assertTrue(http_client.is_closed)
        self.assertIsNone(client._client)

    async def test_close_without_client(self):
        client = RegistryClient()
        await client.close()
        self.assertIsNone(client._client)


if __name__ == "__main__":
    unittest.main()
