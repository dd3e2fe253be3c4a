import os
import platform
import pathlib
import tempfile

from clibsearch.config import CACHE_DIR_NAME, CACHE_DIR_ENV


def get_os():
    system = platform.system().lower()
    if system.startswith("darwin"):
        return "macos"
    if system.startswith("windows"):
        return "windows"
    return "linux"


def cache_home():
    """
    Pick the directory holding the search cache for this OS.
    Falls back to the system temp dir when no per-user cache dir is known.
    """
    override = os.environ.get(CACHE_DIR_ENV)
    if override:
        return pathlib.Path(override)

    osname = get_os()
    if osname == "macos":
        return pathlib.Path.home() / "Library" / "Caches" / CACHE_DIR_NAME
    if osname == "windows":
        local = os.environ.get("LOCALAPPDATA")
        if local:
            return pathlib.Path(local) / CACHE_DIR_NAME
    else:
        xdg = os.environ.get("XDG_CACHE_HOME")
        if xdg:
            return pathlib.Path(xdg) / CACHE_DIR_NAME
    return pathlib.Path(tempfile.gettempdir()) / CACHE_DIR_NAME
