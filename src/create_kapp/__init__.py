"""create-kapp: scaffold a new project from a remote template archive."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("create-kapp")
except PackageNotFoundError:
    __version__ = "0.0.0"
