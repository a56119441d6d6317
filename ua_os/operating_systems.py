"""Operating-system detection from the comment of a user agent's first section.

Each rendering engine formats its comment differently, so detection is a set of
small heuristics picked by :func:`detect_os`. Heuristics never mutate the
record themselves: they return an :class:`OSUpdate` which is merged with
:func:`apply_update`.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .sections import Section

if TYPE_CHECKING:
    from .user_agent import UserAgent

logger = logging.getLogger(__name__)

WINDOWS_NT_VERSIONS = {
    "5.0": "Windows 2000",
    "5.01": "Windows 2000, Service Pack 1 (SP1)",
    "5.1": "Windows XP",
    "5.2": "Windows XP x64 Edition",
    "6.0": "Windows Vista",
    "6.1": "Windows 7",
    "6.2": "Windows 8",
    "6.3": "Windows 8.1",
    "10.0": "Windows 10",
}

# Checked in order, first matching prefix wins.
PLATFORM_PREFIXES = ("Windows", "Symbian", "webOS")

LEGACY_IE_OS = "Windows NT 4.0"


@dataclass(frozen=True)
class OSInfo:
    """Operating system information derived from :attr:`UserAgent.os`."""

    #: Verbatim value of ``UserAgent.os``.
    full_name: str
    #: Family name, e.g. "Mac OS X" rather than "Intel Mac OS X".
    name: str
    #: Dotted version, e.g. "7" for Windows 7 or "10.8" for Mac OS X.
    version: str


@dataclass(frozen=True)
class OSUpdate:
    """Partial update produced by a heuristic.

    ``None`` leaves the field alone. Fields listed in ``if_absent`` are only
    written when the record's current value is empty.
    """

    platform: str | None = None
    os: str | None = None
    localization: str | None = None
    mobile: bool | None = None
    browser_name: str | None = None
    browser_version: str | None = None
    if_absent: frozenset[str] = frozenset()


NO_UPDATE = OSUpdate()


def apply_update(ua: "UserAgent", update: OSUpdate) -> None:
    if update.platform is not None and _writable(ua.platform, "platform", update):
        ua.platform = update.platform
    if update.os is not None and _writable(ua.os, "os", update):
        ua.os = update.os
    if update.localization is not None and _writable(
        ua.localization, "localization", update
    ):
        ua.localization = update.localization
    if update.mobile is not None:
        ua.mobile = update.mobile
    if update.browser_name is not None:
        ua.browser.name = update.browser_name
    if update.browser_version is not None:
        ua.browser.version = update.browser_version


def _writable(current: str, field: str, update: OSUpdate) -> bool:
    return field not in update.if_absent or current == ""


def normalize_os(name: str) -> str:
    """Map ``"Windows NT x.y"`` to its marketing name.

    Any other shape, and any NT version not in :data:`WINDOWS_NT_VERSIONS`,
    is returned unchanged.
    """
    parts = name.split(" ", 2)
    if len(parts) != 3 or parts[1] != "NT":
        return name
    return WINDOWS_NT_VERSIONS.get(parts[2], name)


def get_platform(comment: Sequence[str]) -> str:
    """Coarse platform label taken from the first comment token."""
    if not comment or comment[0] == "compatible":
        return ""
    token = comment[0]
    for prefix in PLATFORM_PREFIXES:
        if token.startswith(prefix):
            return prefix
    if token == "BB10":
        return "BlackBerry"
    return token


def is_webview_token(token: str) -> bool:
    return "wv" in token


def gecko(ua: "UserAgent", comment: Sequence[str]) -> OSUpdate:
    if len(comment) <= 1:
        return NO_UPDATE

    # The 4th token is the locale, unless it is a revision like "rv:XX.X"
    # (Firefox on Ubuntu puts it there).
    localization = None
    if len(comment) > 3 and not comment[3].startswith("rv:"):
        localization = comment[3]

    if comment[1] in ("U", "arm_64"):
        os = comment[2] if len(comment) > 2 else comment[1]
        return OSUpdate(os=normalize_os(os), localization=localization)
    if "Android" in ua.platform:
        # Firefox for Android: "Android" is the platform announced first,
        # the real platform comes second.
        return OSUpdate(
            platform=normalize_os(comment[1]),
            os=ua.platform,
            mobile=True,
            localization=localization,
        )
    if comment[0] in ("Mobile", "Tablet"):
        return OSUpdate(os="FirefoxOS", mobile=True, localization=localization)
    return OSUpdate(
        os=normalize_os(comment[1]),
        localization=localization,
        if_absent=frozenset({"os"}),
    )


def webkit(ua: "UserAgent", comment: Sequence[str]) -> OSUpdate:
    os = normalize_os(comment[1]) if len(comment) > 1 else None
    mobile = None
    browser_name = None
    for token in comment:
        if is_webview_token(token):
            mobile = True
            if "Chrome" in ua.browser.name:
                browser_name = "Chrome WebView"
            else:
                browser_name = "Android WebView"
            break
    return OSUpdate(
        platform=get_platform(comment),
        os=os,
        mobile=mobile,
        browser_name=browser_name,
        if_absent=frozenset({"platform", "os"}),
    )


def trident(ua: "UserAgent", comment: Sequence[str]) -> OSUpdate:
    # The OS may already be set by the Windows platform for IE11.
    os = normalize_os(comment[2]) if len(comment) > 2 else LEGACY_IE_OS
    mobile = True if any(t.startswith("IEMobile") for t in comment) else None
    return OSUpdate(
        platform="Windows",
        os=os,
        mobile=mobile,
        if_absent=frozenset({"os"}),
    )


def opera(ua: "UserAgent", comment: Sequence[str]) -> OSUpdate:
    size = len(comment)
    first = comment[0]

    if first.startswith("Windows"):
        localization = None
        if size > 2:
            if size > 3 and comment[2].startswith("MRA"):
                localization = comment[3]
            else:
                localization = comment[2]
        return OSUpdate(
            platform="Windows",
            os=normalize_os(first),
            localization=localization,
        )

    mobile = True if first.startswith("Android") else None
    if size > 1:
        return OSUpdate(
            platform=first,
            os=comment[1],
            localization=comment[3] if size > 3 else None,
            mobile=mobile,
        )
    return OSUpdate(platform=first, os=first, mobile=mobile)


def dalvik(ua: "UserAgent", comment: Sequence[str]) -> OSUpdate:
    """Android's VM sends Dalvik as the product of the first section."""
    if not comment[0].startswith("Linux"):
        return NO_UPDATE
    return OSUpdate(
        platform=comment[0],
        os=comment[2] if len(comment) > 2 else None,
        mobile=True,
    )


Heuristic = Callable[["UserAgent", Sequence[str]], OSUpdate]

ENGINE_HEURISTICS: dict[str, Heuristic] = {
    "Gecko": gecko,
    "AppleWebKit": webkit,
    "Trident": trident,
}

# Heuristics keyed by the product name of the first section. They only run
# when the section carries a comment.
PRODUCT_HEURISTICS: dict[str, Heuristic] = {
    "Opera": opera,
    "Dalvik": dalvik,
}


def webkit_browser(sections: Sequence[Section]) -> OSUpdate:
    """WebKit browsers report their real identity in a later section."""
    for section in sections:
        name = section.name.casefold()
        if name == "chrome":
            return OSUpdate(browser_name="Chrome", browser_version=section.version)
        if name == "version":
            return OSUpdate(
                browser_name="Android WebView", browser_version=section.version
            )
    return NO_UPDATE


def detect_os(ua: "UserAgent", sections: Sequence[Section]) -> None:
    """Fill the OS related fields of ``ua`` from ``sections``.

    Nothing is raised for unknown input: ``ua.undecided`` is set instead.
    """
    if not sections:
        return
    first = sections[0]

    if first.name == "Mozilla":
        _detect_mozilla(ua, sections)
    elif first.name in PRODUCT_HEURISTICS:
        if first.comment:
            logger.debug("running %s heuristic", first.name)
            apply_update(ua, PRODUCT_HEURISTICS[first.name](ua, first.comment))
    elif first.name == "okhttp":
        apply_update(
            ua,
            OSUpdate(mobile=True, browser_name="OkHttp", browser_version=first.version),
        )
    else:
        _undecided(ua, first)


def _detect_mozilla(ua: "UserAgent", sections: Sequence[Section]) -> None:
    comment = sections[0].comment
    platform = get_platform(comment)
    os = None
    # Windows carries its version in the platform token itself.
    if platform == "Windows" and comment:
        os = normalize_os(comment[0])
    apply_update(ua, OSUpdate(platform=platform, os=os))

    engine = ua.browser.engine
    if engine == "":
        _undecided(ua, sections[0])
        return
    heuristic = ENGINE_HEURISTICS.get(engine)
    if heuristic is None:
        logger.debug("no OS heuristic for engine %r", engine)
        return
    logger.debug("running %s heuristic", engine)
    apply_update(ua, heuristic(ua, comment))
    if engine == "AppleWebKit":
        apply_update(ua, webkit_browser(sections))


def _undecided(ua: "UserAgent", section: Section) -> None:
    logger.debug("undecided user agent, first section %r", section.name)
    ua.undecided = True


def os_name(os_split: Sequence[str]) -> tuple[str, str]:
    """Split the space separated parts of an OS string into name and version."""
    if len(os_split) == 1:
        return os_split[0], ""

    # The version is assumed to be the last part.
    name_split = list(os_split[:-1])
    version = os_split[-1]

    if name_split[:2] == ["Intel", "Mac"]:
        name_split = name_split[1:]
    name = " ".join(name_split)

    if "x86" in version or "i686" in version:
        # Architectures, not versions.
        version = ""
    elif version == "X" and name == "Mac OS":
        name = f"{name} {version}"
        version = ""
    return name, version


def os_info(os: str) -> OSInfo:
    """Build an :class:`OSInfo` out of a raw OS string."""
    # iOS: "CPU iPhone OS 10_3_1 like Mac OS X"
    cleaned = os.replace("like Mac OS X", "", 1).replace("CPU", "", 1).strip(" ")
    os_split = cleaned.split(" ")

    # Only this exact string; "XP" is reported as the version.
    if cleaned == "Windows XP x64 Edition":
        os_split = os_split[:-2]

    name, version = os_name(os_split)

    if "/" in name:
        parts = name.split("/")
        name, version = parts[0], parts[1]

    return OSInfo(full_name=os, name=name, version=version.replace("_", "."))
