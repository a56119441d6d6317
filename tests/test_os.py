import pathlib
import operator

import pytest

try:
    from yaml import CSafeLoader as SafeLoader, load
except ImportError:
    from yaml import SafeLoader, load  # type: ignore

import ua_os


TESTS_DIR = pathlib.Path(__file__).resolve().parent


MISSING_OS = {
    "platform": "",
    "os": "",
    "localization": "",
    "mobile": False,
    "undecided": False,
}
get_result = operator.attrgetter(*MISSING_OS)

MISSING_OS_INFO = {"os_name": "", "os_version": ""}


def load_test_cases(test_file: pathlib.Path) -> list[dict]:
    with test_file.open("rb") as f:
        contents = load(f, Loader=SafeLoader)
    return contents["test_cases"]


def get_reference(test_case: dict, defaults: dict) -> tuple:
    return tuple(test_case.get(k, v) for k, v in defaults.items())


@pytest.mark.parametrize(
    "test_file",
    [
        TESTS_DIR / "test_os.yaml",
    ],
    ids=operator.attrgetter("name"),
)
def test_os(test_file: pathlib.Path) -> None:
    for test_case in load_test_cases(test_file):
        r = ua_os.parse(test_case["user_agent_string"])

        print(test_case)
        assert get_result(r) == get_reference(test_case, MISSING_OS)


@pytest.mark.parametrize(
    "test_file",
    [
        TESTS_DIR / "test_os.yaml",
    ],
    ids=operator.attrgetter("name"),
)
def test_os_info(test_file: pathlib.Path) -> None:
    for test_case in load_test_cases(test_file):
        info = ua_os.parse(test_case["user_agent_string"]).os_info()

        assert info.full_name == test_case.get("os", "")
        assert (info.name, info.version) == get_reference(test_case, MISSING_OS_INFO)


@pytest.mark.parametrize(
    "test_file",
    [
        TESTS_DIR / "test_os.yaml",
    ],
    ids=operator.attrgetter("name"),
)
def test_browser(test_file: pathlib.Path) -> None:
    for test_case in load_test_cases(test_file):
        if "browser_name" not in test_case:
            continue
        browser = ua_os.parse(test_case["user_agent_string"]).browser

        assert (browser.name, browser.version) == (
            test_case["browser_name"],
            test_case["browser_version"],
        )
