# Template content source: remote GitHub copy with a bundled fallback
import logging
import urllib.error
import urllib.request
from importlib import resources

from promptonomicon import __version__
from promptonomicon.config import TEMPLATE_FILES, Settings
from promptonomicon.errors import FetchError

logger = logging.getLogger(__name__)

# ABOUTME: Package directory holding the bundled template copies
BUNDLED_PACKAGE = "promptonomicon.templates_data"


def read_bundled_template(identifier: str) -> str:
    """Read the copy of a template shipped inside the package.

    ABOUTME: Raises FetchError if the bundled file is missing
    """
    try:
        resource = resources.files(BUNDLED_PACKAGE).joinpath(identifier)
        return resource.read_bytes().decode("utf-8")
    except (FileNotFoundError, ModuleNotFoundError, OSError) as e:
        raise FetchError(identifier, e) from e


class TemplateSource:
    """Resolve template identifiers to canonical content.

    ABOUTME: Implements the ContentSource protocol
    ABOUTME: Tries raw.githubusercontent.com first, then the bundled copy
    ABOUTME: Offline mode skips the network entirely
    ABOUTME: No caching - every fetch re-resolves
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings if settings is not None else Settings()

    def url_for(self, identifier: str) -> str:
        return f"{self.settings.base_url}/{identifier}"

    def fetch(self, identifier: str) -> str:
        """Return canonical content for a template.

        Args:
            identifier: One of TEMPLATE_FILES

        Returns:
            Template text

        Raises:
            FetchError: If the identifier is unknown or no source has it
        """
        if identifier not in TEMPLATE_FILES:
            raise FetchError(identifier, "unknown template")

        if self.settings.offline:
            return read_bundled_template(identifier)

        try:
            return self._fetch_remote(identifier)
        except (urllib.error.URLError, TimeoutError, OSError, UnicodeDecodeError) as e:
            logger.warning(
                "Could not download %s (%s); using bundled copy", identifier, e
            )
            try:
                return read_bundled_template(identifier)
            except FetchError as bundled_error:
                raise FetchError(identifier, e) from bundled_error

    def _fetch_remote(self, identifier: str) -> str:
        url = self.url_for(identifier)
        request = urllib.request.Request(
            url,
            headers={"User-Agent": f"promptonomicon/{__version__}"},
        )
        logger.debug("GET %s", url)
        with urllib.request.urlopen(request, timeout=self.settings.timeout) as response:
            body: bytes = response.read()
        return body.decode("utf-8")
