import logging
import tempfile
import unittest
from pathlib import Path

from region_utils.utils import logger


class TestLogger(unittest.TestCase):
    def test_get_logger(self):
        log = logger.get_logger()
        self.assertEqual(log.name, "region_utils")
        child = logger.get_logger("test")
        self.assertEqual(child.name, "region_utils.test")
        child.info("Logger test message")

    def test_line_rotating_handler_rolls_over(self):
        with tempfile.TemporaryDirectory() as tmp:
            log_file = Path(tmp) / "build.log"
            handler = logger.LineRotatingFileHandler(str(log_file), maxLines=3, backupCount=2, encoding="utf-8")
            test_log = logging.getLogger("region_utils_rotation_test")
            test_log.propagate = False
            test_log.addHandler(handler)
            try:
                for i in range(4):
                    test_log.warning(f"line {i}")
            finally:
                test_log.removeHandler(handler)
                handler.close()
            self.assertTrue(Path(f"{log_file}.1").exists())
            self.assertEqual(log_file.read_text(encoding="utf-8").strip(), "line 3")


if __name__ == "__main__":
    unittest.main()
