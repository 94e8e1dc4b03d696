"""
unzipper.py
Unpacks a downloaded shapefile archive into the build directory.
"""
import zipfile
from pathlib import Path
from typing import Optional

from region_utils.errors import ExtractError
from region_utils.utils.logger import get_logger

logger = get_logger()

def extract_archive(zip_path: Path, output_dir: Path, expected: Optional[str] = None) -> Path:
    """
    Extracts every member of zip_path into output_dir.
    If expected is given, the archive must produce a file of that name in
    output_dir; otherwise ExtractError is raised.
    Returns the path of the expected file (or output_dir when none is given).
    """
    zip_path = Path(zip_path)
    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)
    try:
        with zipfile.ZipFile(zip_path, 'r') as zf:
            bad_member = zf.testzip()
            if bad_member is not None:
                raise ExtractError(f"Corrupt member {bad_member} in {zip_path.name}")
            zf.extractall(output_path)
    except (zipfile.BadZipFile, zipfile.LargeZipFile) as e:
        raise ExtractError(f"{zip_path.name} is not a valid zip file: {e}") from e
    except (OSError, EOFError) as e:
        raise ExtractError(f"Could not unzip {zip_path}: {e}") from e
    logger.info(f"Unzipped {zip_path.name} to {output_path}")
    if expected is None:
        return output_path
    target = output_path / expected
    if not target.exists():
        raise ExtractError(f"{zip_path.name} did not contain {expected}")
    return target
