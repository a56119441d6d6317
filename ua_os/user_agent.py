import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from . import operating_systems
from .operating_systems import OSInfo
from .sections import Section, parse_sections

logger = logging.getLogger(__name__)

ENGINES = frozenset({"AppleWebKit", "Gecko"})


@dataclass
class Browser:
    name: str = ""
    version: str = ""
    #: Rendering engine tag: "", "Gecko", "AppleWebKit" or "Trident".
    engine: str = ""


@dataclass
class UserAgent:
    """Result record of a classification.

    ``model`` and ``browser`` are supplied by the caller; everything else is
    written by :meth:`detect_os` and read back through the attributes and
    :meth:`os_info`.
    """

    platform: str = ""
    os: str = ""
    localization: str = ""
    mobile: bool = False
    model: str = ""
    undecided: bool = False
    mozilla: str = ""
    browser: Browser = field(default_factory=Browser)

    def detect_os(self, sections: Sequence[Section]) -> None:
        operating_systems.detect_os(self, sections)

    def os_info(self) -> OSInfo:
        return operating_systems.os_info(self.os)

    def parse(self, ua: str, engine: str | None = None) -> None:
        """Classify the raw user agent string ``ua``.

        ``engine`` is resolved from the sections unless given.
        """
        sections = parse_sections(ua)
        self.platform = self.os = self.localization = self.mozilla = ""
        self.undecided = False
        self.mobile = any(s.name == "Mobile" for s in sections)
        if not sections:
            logger.debug("empty user agent")
            return

        if sections[0].name == "Mozilla":
            self.mozilla = sections[0].version
        self.browser.engine = detect_engine(sections) if engine is None else engine
        self.detect_os(sections)


def detect_engine(sections: Sequence[Section]) -> str:
    """Resolve the rendering engine tag of a ``Mozilla`` user agent."""
    if not sections or sections[0].name != "Mozilla":
        return ""
    comment = sections[0].comment
    if any(token.startswith("Trident/") for token in comment):
        return "Trident"
    if len(comment) > 1 and comment[0] == "compatible" and comment[1].startswith("MSIE"):
        return "Trident"
    if len(sections) > 1 and sections[1].name in ENGINES:
        return sections[1].name
    return ""


def parse(ua: str, engine: str | None = None, model: str = "") -> UserAgent:
    """Classify ``ua`` into a new :class:`UserAgent`."""
    result = UserAgent(model=model)
    result.parse(ua, engine=engine)
    return result
