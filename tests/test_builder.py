import os
import sys
import tempfile
import time
import unittest
from pathlib import Path
from unittest.mock import patch

from PIL import Image

# Add parent directory to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from iconbundle.app import main
from iconbundle.builder import build, discover_types
from iconbundle.core.errors import IconBuildError, ImageLoadError
from iconbundle.core.worker import BuildWorker
from iconbundle.utils.settings import Settings


def names(directory):
    return sorted(p.name for p in Path(directory).iterdir())


class BuildTestCase(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.root = Path(self.tmp.name)
        self.artwork = self.root / "artifacts" / "artwork_prep"
        self.types = self.artwork / "types"
        self.types.mkdir(parents=True)
        self.artifacts = self.root / "artifacts"

        Image.new('RGBA', (1024, 1024), (200, 30, 30, 255)).save(self.artwork / "app.png")
        Image.new('RGBA', (1024, 1024), (255, 255, 255, 255)).save(self.artwork / "doc.png")

        self.settings = Settings()
        self.settings.set("performance", "thread_count", 2)

    def tearDown(self):
        self.tmp.cleanup()

    def add_type(self, code):
        Image.new('RGBA', (512, 512), (20, 20, 220, 255)).save(self.types / f"{code}.png")


class TestBuild(BuildTestCase):
    def test_app_only(self):
        result = build(self.settings, self.root)

        self.assertEqual(names(self.artifacts / "icns"), ["app.icns"])
        self.assertEqual(names(self.artifacts / "ico"), ["app.ico"])
        self.assertEqual(names(self.artifacts / "png"), ["app.png"])
        for platform in ("linux", "macos", "windows"):
            self.assertEqual(names(self.artifacts / "file_associations" / platform), [])
        self.assertEqual([r.name for r in result.results], ["app"])

    def test_document_types(self):
        self.add_type("eqp")
        self.add_type("skl")

        build(self.settings, self.root)

        self.assertEqual(names(self.artifacts / "icns"), ["app.icns", "eqp_doc.icns", "skl_doc.icns"])
        self.assertEqual(names(self.artifacts / "png"), ["app.png", "eqp_doc.png", "skl_doc.png"])

        descriptors = list((self.artifacts / "file_associations").glob("*/*_ext.properties"))
        self.assertEqual(len(descriptors), 6)
        expected = {"eqp": "GCS Equipment Library", "skl": "GCS Skills Library"}
        for path in descriptors:
            code = path.name.split("_")[0]
            text = path.read_text(encoding='utf-8')
            self.assertIn(f"extension={code}\n", text)
            self.assertIn(f"description={expected[code]}\n", text)

        macos = (self.artifacts / "file_associations" / "macos" / "eqp_ext.properties").read_text(encoding='utf-8')
        self.assertIn("icon=artifacts/icns/eqp_doc.icns\n", macos)

    def test_resources(self):
        self.add_type("eqp")
        build(self.settings, self.root)

        resources = self.root / "resources" / "images"
        self.assertEqual(names(resources), sorted(
            [f"app_{w}.png" for w in (1024, 512, 256, 128, 64, 48, 32, 16)]
            + ["eqp_file.png", "eqp_file@2x.png", "eqp_marker.png", "eqp_marker@2x.png"]
        ))
        with Image.open(resources / "eqp_file@2x.png") as img:
            self.assertEqual(img.size, (32, 32))
        with Image.open(resources / "eqp_marker.png") as img:
            self.assertEqual(img.size, (64, 64))

    def test_rerun_replaces_stale_outputs(self):
        self.add_type("eqp")
        build(self.settings, self.root)

        (self.types / "eqp.png").unlink()
        (self.artifacts / "png" / "leftover.png").write_bytes(b"old")
        build(self.settings, self.root)

        self.assertEqual(names(self.artifacts / "png"), ["app.png"])
        self.assertEqual(names(self.artifacts / "file_associations" / "linux"), [])

    def test_broken_glyph_fails_run(self):
        self.add_type("eqp")
        (self.types / "bad.png").write_bytes(b"garbage")

        with self.assertRaises(ImageLoadError) as ctx:
            build(self.settings, self.root)
        self.assertEqual(ctx.exception.path, self.types / "bad.png")

    def test_missing_doc_frame(self):
        (self.artwork / "doc.png").unlink()
        with self.assertRaises(ImageLoadError):
            build(self.settings, self.root)

    def test_job_failure_cancels_pending_jobs(self):
        calls = []

        class Failing:
            name = "failing"

            def run(self, icons, associations):
                calls.append(self.name)
                raise IconBuildError("boom")

        class Pending:
            name = "pending"

            def run(self, icons, associations):
                calls.append(self.name)
                time.sleep(0.05)
                return []

        worker = BuildWorker([Failing()] + [Pending() for _ in range(20)], None, None, thread_count=1)
        with self.assertRaises(IconBuildError):
            worker.run()
        self.assertEqual(calls[0], "failing")
        self.assertLess(len(calls), 21)


class TestDiscoverTypes(unittest.TestCase):
    def test_only_png_files(self):
        with tempfile.TemporaryDirectory() as tmp:
            tmp = Path(tmp)
            for name in ("skl.png", "eqp.png", "notes.txt", "gct.jpg"):
                (tmp / name).write_bytes(b"")
            (tmp / "dir.png").mkdir()

            self.assertEqual(discover_types(tmp), ["eqp", "skl"])

    def test_bare_extension_gives_empty_code(self):
        with tempfile.TemporaryDirectory() as tmp:
            tmp = Path(tmp)
            (tmp / ".png").write_bytes(b"")
            (tmp / "eqp.png").write_bytes(b"")

            self.assertEqual(discover_types(tmp), ["", "eqp"])

    def test_missing_directory(self):
        with self.assertRaises(IconBuildError):
            discover_types("/nonexistent/types/dir")


class TestMain(BuildTestCase):
    def test_success_exit_code(self):
        self.assertEqual(main(["--root", str(self.root), "--threads", "2"]), 0)
        self.assertTrue((self.artifacts / "ico" / "app.ico").is_file())

    def test_failure_exit_code(self):
        (self.artwork / "app.png").write_bytes(b"garbage")
        with patch('iconbundle.app.logger') as mock_logger:
            self.assertEqual(main(["--root", str(self.root)]), 1)
        message = mock_logger.error.call_args[0][0]
        self.assertIn("app.png", message)


if __name__ == '__main__':
    unittest.main()
