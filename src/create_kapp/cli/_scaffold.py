"""Download a template archive and unpack it into the chosen directory."""

from __future__ import annotations

import io
import logging
import os
import shutil
import time
import zipfile
from dataclasses import dataclass
from pathlib import Path

import httpx

from create_kapp.cli._prompts import PromptEngine, non_empty
from create_kapp.cli._types import PromptKind, Template

logger = logging.getLogger(__name__)

DEFAULT_HOST = "github.com"
DEFAULT_OWNER = "kars1996"
DEFAULT_BRANCH = "master"

DESTINATION_QUESTION = "Setup the project in (specify folder)...?"
TEMPLATE_QUESTION = "What scaffold do you want to start with?"
NOT_EMPTY_QUESTION = "Directory is not empty. Continue?"

_DEFAULT_FILE_MODE = 0o644


class ScaffoldError(Exception):
    """Base class for failures while fetching or unpacking a template."""


class DownloadError(ScaffoldError):
    """The archive could not be fetched."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ArchiveError(ScaffoldError):
    """The response body is not a ZIP archive."""


class ExtractionError(ScaffoldError):
    """An archive entry could not be written."""


@dataclass(frozen=True)
class TemplateSource:
    """Where template archives are downloaded from."""

    host: str = DEFAULT_HOST
    owner: str = DEFAULT_OWNER
    branch: str = DEFAULT_BRANCH

    def archive_url(self, template: Template) -> str:
        return (
            f"https://{self.host}/{self.owner}/{template.value}"
            f"/archive/refs/heads/{self.branch}.zip"
        )


def download_archive(client: httpx.Client, url: str) -> bytes:
    """GET *url* and return the whole body. Raises DownloadError."""
    logger.debug("GET %s", url)
    try:
        response = client.get(url, follow_redirects=True)
    except httpx.HTTPError as exc:
        raise DownloadError(str(exc)) from exc

    if not response.is_success:
        raise DownloadError(
            f"{url} returned {response.status_code}", status_code=response.status_code
        )

    logger.debug("Received %d bytes", len(response.content))
    return response.content


def _entry_mode(info: zipfile.ZipInfo) -> int:
    return (info.external_attr >> 16) & 0o777 or _DEFAULT_FILE_MODE


def extract_archive(data: bytes, destination: Path) -> list[str]:
    """Write every entry of the ZIP in *data* below *destination*.

    Returns the entry names in archive order. Stops at the first failure and
    leaves already written entries in place.
    """
    try:
        archive = zipfile.ZipFile(io.BytesIO(data))
    except zipfile.BadZipFile as exc:
        raise ArchiveError(str(exc)) from exc

    root = destination.resolve()
    written: list[str] = []

    with archive:
        for info in archive.infolist():
            target = destination / info.filename
            if not target.resolve().is_relative_to(root):
                raise ExtractionError(f"{info.filename!r} points outside {destination}")

            try:
                if info.is_dir():
                    target.mkdir(parents=True, exist_ok=True)
                else:
                    target.parent.mkdir(parents=True, exist_ok=True)
                    fd = os.open(target, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, _entry_mode(info))
                    with os.fdopen(fd, "wb") as dst, archive.open(info) as src:
                        shutil.copyfileobj(src, dst)
            except (OSError, zipfile.BadZipFile) as exc:
                raise ExtractionError(f"{info.filename}: {exc}") from exc

            logger.debug("Extracted %s", info.filename)
            written.append(info.filename)

    return written


class ScaffoldSession:
    """One scaffolding run: ask where and what, then fetch and unpack."""

    def __init__(
        self,
        prompt: PromptEngine,
        client: httpx.Client,
        source: TemplateSource | None = None,
        pause: float = 2.0,
    ) -> None:
        self.prompt = prompt
        self.client = client
        self.source = source if source is not None else TemplateSource()
        self.pause = pause
        self.destination: Path | None = None

    def resolve_path(self, value: str) -> Path:
        """Return the absolute destination for *value*, creating it if missing."""
        if value == ".":
            path = Path.cwd()
        else:
            path = Path(value).expanduser()
            if not path.exists():
                try:
                    path.mkdir(parents=True)
                except OSError as exc:
                    logger.warning("Could not create %s: %s", path, exc)
            path = Path(os.path.abspath(path))

        self.destination = path
        return path

    def _fail(self, message: str) -> bool:
        self.prompt.error(message)
        time.sleep(self.pause)
        return False

    def fetch_and_unpack(self, template: Template) -> bool:
        """Download *template* and extract it into the destination.

        Failures are reported on the terminal and yield ``False``.
        """
        if self.destination is None:
            raise RuntimeError("resolve_path() must be called before fetch_and_unpack()")

        p = self.prompt.palette
        url = self.source.archive_url(template)
        self.prompt.print(
            f"{p.cyan}∂ Downloading template {template.value}...{p.white}", end="\n"
        )

        try:
            data = download_archive(self.client, url)
            self.prompt.print("Extracting...", end="\n")
            written = extract_archive(data, self.destination)
        except DownloadError as exc:
            if exc.status_code is not None:
                return self._fail(f"Failed to download: {exc.status_code}")
            return self._fail(f"Error occurred: {exc}")
        except ScaffoldError as exc:
            return self._fail(f"Error occurred: {exc}")

        logger.info("Extracted %d entries into %s", len(written), self.destination)
        self.prompt.print("Download and extraction complete!", end="\n")
        return True

    def run(
        self,
        destination: str | None = None,
        template: str | None = None,
        assume_yes: bool = False,
    ) -> bool:
        """Run the whole scaffold sequence. Returns False if the user aborted."""
        if not destination:
            destination = self.prompt.ask(PromptKind.INPUT, DESTINATION_QUESTION, non_empty)
        else:
            self.prompt.recap(DESTINATION_QUESTION, destination)

        path = self.resolve_path(destination)

        if not assume_yes and path.is_dir() and any(path.iterdir()):
            logger.debug("%s already holds files", path)
            answer = self.prompt.ask(PromptKind.CONFIRM, NOT_EMPTY_QUESTION)
            if answer == "n":
                self.prompt.print("Aborted.", end="\n")
                return False

        if template is None:
            template = self.prompt.ask(PromptKind.INPUT, TEMPLATE_QUESTION)
        else:
            self.prompt.recap(TEMPLATE_QUESTION, template)

        self.fetch_and_unpack(Template.resolve(template))

        self.prompt.print("Successfully set up project :D", end="\n")
        return True
