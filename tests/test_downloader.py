import io
import tempfile
import unittest
import zipfile
from pathlib import Path
from unittest import mock

import requests

from region_utils.download import downloader
from region_utils.download.sources import SHAPEFILE_SOURCES, construct_url
from region_utils.errors import DownloadError, ExtractError

ZIP_SOURCE = SHAPEFILE_SOURCES[0]


def fake_response(status_code=200, body=b""):
    response = mock.Mock()
    response.status_code = status_code
    response.iter_content.return_value = [body[i:i + 1024] for i in range(0, len(body), 1024)]
    return response


def archive_bytes(members):
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        for name, data in members.items():
            zf.writestr(name, data)
    return buf.getvalue()


class TestDownloadFile(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.dest = Path(self.tmp.name)

    @mock.patch("region_utils.download.downloader.requests.get")
    def test_writes_body(self, get):
        get.return_value = fake_response(200, b"x" * 3000)
        path = downloader.download_file("https://example.test/a.zip", self.dest / "a.zip")
        self.assertEqual(path.read_bytes(), b"x" * 3000)
        self.assertFalse((self.dest / "a.zip.tmp").exists())
        get.return_value.close.assert_called_once()

    @mock.patch("region_utils.download.downloader.requests.get")
    def test_non_success_status_raises(self, get):
        get.return_value = fake_response(404)
        with self.assertRaises(DownloadError):
            downloader.download_file("https://example.test/a.zip", self.dest / "a.zip")
        self.assertEqual(list(self.dest.iterdir()), [])
        self.assertEqual(get.call_count, 1)

    @mock.patch("region_utils.download.downloader.requests.get")
    def test_transport_failure_raises(self, get):
        get.side_effect = requests.ConnectionError("connection refused")
        with self.assertRaises(DownloadError):
            downloader.download_file("https://example.test/a.zip", self.dest / "a.zip")


    @mock.patch("region_utils.download.downloader.requests.get")
    def test_failed_rename_raises_download_error(self, get):
        get.return_value = fake_response(200, b"x" * 10)
        with mock.patch.object(Path, "replace", side_effect=OSError("file is busy")):
            with self.assertRaises(DownloadError):
                downloader.download_file("https://example.test/a.zip", self.dest / "a.zip")
        self.assertFalse((self.dest / "a.zip.tmp").exists())
        self.assertFalse((self.dest / "a.zip").exists())


class TestEnsureShapefile(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.dest = Path(self.tmp.name)

    @mock.patch("region_utils.download.downloader.requests.get")
    def test_downloads_extracts_and_removes_archive(self, get):
        stem = ZIP_SOURCE.shapefile[:-4]
        body = archive_bytes({f"{stem}.shp": b"shp", f"{stem}.dbf": b"dbf", f"{stem}.shx": b"shx"})
        get.return_value = fake_response(200, body)

        path = downloader.ensure_shapefile(ZIP_SOURCE, self.dest, base_url="https://example.test/shp/")

        self.assertEqual(path, self.dest / ZIP_SOURCE.shapefile)
        self.assertEqual(path.read_bytes(), b"shp")
        self.assertTrue((self.dest / f"{stem}.dbf").exists())
        self.assertFalse((self.dest / ZIP_SOURCE.archive).exists())
        self.assertEqual(get.call_args[0][0], construct_url(ZIP_SOURCE.archive, "https://example.test/shp/"))

    @mock.patch("region_utils.download.downloader.requests.get")
    def test_existing_shapefile_is_not_downloaded(self, get):
        (self.dest / ZIP_SOURCE.shapefile).write_bytes(b"shp")
        downloader.ensure_shapefile(ZIP_SOURCE, self.dest)
        get.assert_not_called()

    @mock.patch("region_utils.download.downloader.requests.get")
    def test_corrupt_archive_raises_extract_error(self, get):
        get.return_value = fake_response(200, b"this is not a zip file")
        with self.assertRaises(ExtractError):
            downloader.ensure_shapefile(ZIP_SOURCE, self.dest)

    @mock.patch("region_utils.download.downloader.requests.get")
    def test_archive_without_shapefile_raises_extract_error(self, get):
        get.return_value = fake_response(200, archive_bytes({"readme.txt": b"hi"}))
        with self.assertRaises(ExtractError):
            downloader.ensure_shapefile(ZIP_SOURCE, self.dest)

    def test_offline_missing_file_raises(self):
        with self.assertRaises(DownloadError):
            downloader.ensure_shapefile(ZIP_SOURCE, self.dest, download=False)


class TestFetchSources(unittest.TestCase):
    @mock.patch("region_utils.download.downloader.requests.get")
    def test_parallel_fetch_returns_paths_in_source_order(self, get):
        def respond(url, **kwargs):
            source = next(s for s in SHAPEFILE_SOURCES if url.endswith(s.archive))
            return fake_response(200, archive_bytes({source.shapefile: source.region_type.encode()}))
        get.side_effect = respond

        with tempfile.TemporaryDirectory() as tmp:
            paths = downloader.fetch_sources(SHAPEFILE_SOURCES, Path(tmp), parallel=3)
            self.assertEqual([p.name for p in paths], [s.shapefile for s in SHAPEFILE_SOURCES])
            self.assertEqual(paths[2].read_bytes(), b"state")

    @mock.patch("region_utils.download.downloader.requests.get")
    def test_parallel_failure_is_raised(self, get):
        get.return_value = fake_response(500)
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(DownloadError):
                downloader.fetch_sources(SHAPEFILE_SOURCES, Path(tmp), parallel=2)


if __name__ == "__main__":
    unittest.main()
