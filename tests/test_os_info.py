import pytest

from ua_os import OSInfo, UserAgent, os_info
from ua_os.operating_systems import os_name


@pytest.mark.parametrize(
    "os_split,expected",
    [
        (["Ubuntu"], ("Ubuntu", "")),
        (["Intel", "Mac", "OS", "X", "10_8"], ("Mac OS X", "10_8")),
        (["Mac", "OS", "X"], ("Mac OS X", "")),
        (["Linux", "i686"], ("Linux", "")),
        (["Linux", "x86_64"], ("Linux", "")),
        (["Android", "4.4.2"], ("Android", "4.4.2")),
        (["Intel"], ("Intel", "")),
    ],
)
def test_os_name(os_split: list[str], expected: tuple[str, str]) -> None:
    assert os_name(os_split) == expected


@pytest.mark.parametrize(
    "os,name,version",
    [
        ("CPU iPhone OS 10_3_1 like Mac OS X", "iPhone OS", "10.3.1"),
        ("CPU OS 9_3 like Mac OS X", "OS", "9.3"),
        ("Intel Mac OS X 10_15_7", "Mac OS X", "10.15.7"),
        ("Windows 7", "Windows", "7"),
        ("Windows 8.1", "Windows", "8.1"),
        ("Windows XP x64 Edition", "Windows", "XP"),
        ("Ubuntu/10.10", "Ubuntu", "10.10"),
        ("FirefoxOS", "FirefoxOS", ""),
        ("", "", ""),
    ],
)
def test_os_info(os: str, name: str, version: str) -> None:
    assert os_info(os) == OSInfo(full_name=os, name=name, version=version)


def test_os_info_is_idempotent() -> None:
    ua = UserAgent(os="Intel Mac OS X 10_15_7")

    assert ua.os_info() == ua.os_info()


def test_os_info_follows_os() -> None:
    ua = UserAgent(os="Windows 7")
    assert ua.os_info().version == "7"

    ua.os = "Windows 10"
    assert ua.os_info() == OSInfo(full_name="Windows 10", name="Windows", version="10")


def test_os_info_is_frozen() -> None:
    info = os_info("Android 9")

    with pytest.raises(AttributeError):
        info.name = "iOS"  # type: ignore[misc]
