"""Loading bundle info dictionaries from Info.plist files."""

import logging
import plistlib
from functools import lru_cache
from pathlib import Path
from xml.parsers.expat import ExpatError

from config.settings import get_settings
from utils.bundle_info import BundleInfo

logger = logging.getLogger(__name__)

INFO_PLIST_NAME = "Info.plist"

# macOS apps keep the plist under Contents/, iOS apps at the bundle root
_BUNDLE_PLIST_LOCATIONS = (
    Path("Contents") / INFO_PLIST_NAME,
    Path(INFO_PLIST_NAME),
)


def _find_info_plist(path: Path) -> Path | None:
    if path.is_file():
        return path
    if path.is_dir():
        for location in _BUNDLE_PLIST_LOCATIONS:
            candidate = path / location
            if candidate.is_file():
                return candidate
    return None


def load_info_plist(path: str | Path) -> BundleInfo:
    """
    Load a bundle's info dictionary.

    Args:
        path: An Info.plist file (XML or binary), or a bundle directory
            containing one

    Returns:
        BundleInfo snapshot; empty if there is no readable info dictionary
    """
    plist_path = _find_info_plist(Path(path))
    if plist_path is None:
        logger.info(f"No {INFO_PLIST_NAME} found at {path}")
        return BundleInfo()

    try:
        with plist_path.open("rb") as fp:
            info = plistlib.load(fp)
    except (OSError, ValueError, ExpatError) as e:
        logger.warning(f"Failed to read {plist_path}: {e}")
        return BundleInfo()

    if not isinstance(info, dict):
        logger.warning(
            f"Expected a dictionary at the top of {plist_path}, got {type(info).__name__}"
        )
        return BundleInfo()

    return BundleInfo(info)


@lru_cache(maxsize=1)
def get_main_bundle() -> BundleInfo:
    """
    The info dictionary of the application bundle this service describes.

    Read once from ``MAIN_BUNDLE_PATH``. Without it the main bundle has no
    info dictionary, the same as a process that isn't inside an app bundle.
    """
    main_bundle_path = get_settings().main_bundle_path
    if main_bundle_path is None:
        logger.info("MAIN_BUNDLE_PATH is not set; main bundle info is empty")
        return BundleInfo()

    return load_info_plist(main_bundle_path)
