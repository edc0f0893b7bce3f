from datetime import datetime, timezone

import pytest

from sagegit import version
from sagegit.version import BuildInfo, determine_version, get, read_build_info


def _vcs_info():
    return BuildInfo(
        main_version="(devel)",
        settings={
            "vcs.revision": "abcdef1234567",
            "vcs.time": datetime.now(timezone.utc).isoformat(),
        },
    )


def test_get_is_cached_and_consistent():
    first = get()
    second = get()
    assert first != ""
    assert first == second
    assert first == determine_version(version.VERSION, read_build_info())


@pytest.mark.parametrize(
    "ldflags,info,expected",
    [
        ("1.2.3", None, "1.2.3"),
        ("", None, "0.0.0-dev"),
    ],
)
def test_determine_version(ldflags, info, expected):
    assert determine_version(ldflags, info) == expected


def test_ldflags_version_wins_over_build_info():
    assert determine_version("1.2.3", BuildInfo(main_version="v9.9.9")) == "1.2.3"


def test_determine_version_with_main_module_version():
    assert determine_version("", BuildInfo(main_version="v1.2.3")) == "1.2.3"


def test_determine_version_with_vcs_information():
    result = determine_version("", _vcs_info())
    assert result.startswith("dev-abcdef1-")


def test_determine_version_devel_without_vcs_falls_back():
    assert determine_version("", BuildInfo(main_version="(devel)")) == "0.0.0-dev"


def test_determine_version_needs_both_vcs_fields():
    info = BuildInfo(main_version="", settings={"vcs.revision": "abcdef1234567"})
    assert determine_version("", info) == "0.0.0-dev"


def test_determine_version_fallback():
    assert determine_version("", None) == "0.0.0-dev"