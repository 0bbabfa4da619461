"""Tests for tmnclient.download against an in-process aiohttp server."""

import logging
import unittest

import aiohttp
from aiohttp import web
from aiohttp.test_utils import AioHTTPTestCase

from tmnclient.constants import DRY_RUN_BYTES, DRY_RUN_SECONDS
from tmnclient.download import DownloadResult, download_url, measure_download
from tmnclient.errors import DownloadError


class TestDownloadUrl(unittest.TestCase):
    def test_size_substituted_verbatim(self):
        self.assertEqual(download_url("http://ca.testmy.net", 10240), "http://ca.testmy.net/dl-10240")
        self.assertEqual(download_url("http://x:81", 1), "http://x:81/dl-1")


class TestDownloadResult(unittest.TestCase):
    def test_speed(self):
        r = DownloadResult(bytes_total=1_000_000, duration=8.0)
        self.assertAlmostEqual(r.speed_mbps, 1.0)

    def test_zero_duration(self):
        r = DownloadResult(bytes_total=100, duration=0.0)
        self.assertEqual(r.speed_mbps, 0.0)

    def test_to_dict(self):
        r = DownloadResult(url="http://a/dl-1", bytes_total=125_000_000, duration=10.0, status=200)
        d = r.to_dict()
        self.assertEqual(d["bytes_total"], 125_000_000)
        self.assertEqual(d["status"], 200)
        self.assertAlmostEqual(d["speed_mbps"], 100.0)
        self.assertFalse(d["dry_run"])


class TestMeasureDownload(AioHTTPTestCase):
    async def get_application(self):
        self.seen = []

        async def payload(request):
            self.seen.append((request.path, request.headers.get("Accept-Encoding")))
            return web.Response(body=b"x" * int(request.match_info["size"]))

        async def missing(request):
            self.seen.append((request.path, None))
            return web.Response(status=404, text="nope")

        async def truncated(request):
            self.seen.append((request.path, None))
            resp = web.StreamResponse()
            resp.content_length = 1000
            # Close after the handler so the client sees EOF at 10 of 1000 bytes.
            resp.force_close()
            await resp.prepare(request)
            await resp.write(b"x" * 10)
            return resp

        app = web.Application()
        app.router.add_get("/dl-{size}", payload)
        app.router.add_get("/gone/dl-{size}", missing)
        app.router.add_get("/short/dl-{size}", truncated)
        return app

    def base(self):
        return str(self.server.make_url("/")).rstrip("/")

    async def test_real_download_counts_bytes(self):
        result = await measure_download(self.base(), 300_000, chunk_size=1024)
        self.assertEqual(result.bytes_total, 300_000)
        self.assertEqual(result.status, 200)
        self.assertFalse(result.dry_run)
        self.assertGreaterEqual(result.duration, 0.0)
        self.assertTrue(result.url.endswith("/dl-300000"))
        self.assertEqual(self.seen, [("/dl-300000", "identity")])

    async def test_dry_run_uses_sentinels(self):
        for size in (1, 2048, 10240):
            with self.subTest(size=size):
                result = await measure_download(self.base(), size, dry_run=True)
                self.assertEqual(result.bytes_total, DRY_RUN_BYTES)
                self.assertEqual(result.duration, DRY_RUN_SECONDS)
                self.assertTrue(result.dry_run)
        # The request is still made.
        self.assertEqual(len(self.seen), 3)

    async def test_error_status_is_not_an_error(self):
        result = await measure_download(self.base() + "/gone", 10)
        self.assertEqual(result.status, 404)
        self.assertEqual(result.bytes_total, 4)

    async def test_supplied_session_left_open(self):
        async with aiohttp.ClientSession() as session:
            result = await measure_download(self.base(), 10, session=session)
            self.assertFalse(session.closed)
        self.assertEqual(result.bytes_total, 10)

    async def test_logs_progress(self):
        with self.assertLogs("tmnclient.download", level="INFO") as cm:
            await measure_download(self.base(), 100)
        output = "\n".join(cm.output)
        self.assertIn("Starting download from", output)
        self.assertIn("100 bytes downloaded in", output)

    async def test_injected_logger(self):
        logger = logging.getLogger("test.injected")
        with self.assertLogs(logger, level="DEBUG") as cm:
            await measure_download(self.base(), 5, logger=logger)
        self.assertTrue(any("HTTP 200" in line for line in cm.output))

    async def test_truncated_body_is_an_error(self):
        with self.assertRaises(DownloadError) as ctx:
            await measure_download(self.base() + "/short", 1)
        self.assertIsInstance(ctx.exception.__cause__, aiohttp.ClientPayloadError)

    async def test_connection_refused(self):
        with self.assertRaises(DownloadError) as ctx:
            await measure_download("http://127.0.0.1:1", 10)
        self.assertIn("http://127.0.0.1:1", str(ctx.exception))
        self.assertIsInstance(ctx.exception.__cause__, (aiohttp.ClientError, OSError))


if __name__ == "__main__":
    unittest.main()
