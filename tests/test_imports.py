import unittest
import importlib

import region_utils

MODULES = [
    "region_utils",
    "region_utils.region_cli",
    "region_utils.config",
    "region_utils.errors",
    "region_utils.download.downloader",
    "region_utils.download.sources",
    "region_utils.load_db.unzipper",
    "region_utils.load_db.region_db",
    "region_utils.regions.reader",
    "region_utils.regions.bounds",
    "region_utils.regions.aggregator",
    "region_utils.regions.pipeline",
    "region_utils.utils.logger",
]

class TestModuleImports(unittest.TestCase):
    def test_imports(self):
        for module in MODULES:
            with self.subTest(module=module):
                try:
                    importlib.import_module(module)
                except Exception as e:
                    self.fail(f"Failed to import {module}: {e}")

    def test_version(self):
        self.assertTrue(hasattr(region_utils, "__version__"))

if __name__ == "__main__":
    unittest.main()
