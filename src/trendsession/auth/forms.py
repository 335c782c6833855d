"""Form field scraping for login pages."""

import logging
from typing import Union

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)


class FormExtractor:
    """Collects name/value pairs from every ``<input>`` element of a page."""

    def __init__(self, parser: str = "html.parser"):
        self.parser = parser

    def extract_inputs(self, html: Union[str, bytes]) -> dict[str, str]:
        """
        Extract input fields from an HTML document.

        Parsing is best effort: malformed markup yields whatever inputs could
        be found. Inputs without a name are skipped, a missing value becomes
        an empty string, and when several inputs share a name the last one
        in document order wins.

        Args:
            html: Page body as text or raw bytes.

        Returns:
            Mapping of field name to field value.
        """
        if not html:
            return {}

        soup = BeautifulSoup(html, self.parser)

        fields = {}
        for element in soup.find_all("input"):
            name = element.get("name")
            if not name:
                continue
            fields[name] = element.get("value", "")

        logger.debug(f"Extracted {len(fields)} input fields")
        return fields
