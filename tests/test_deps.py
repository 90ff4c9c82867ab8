import os

import pytest

from pginit.deps import check_dependencies
from pginit.errors import MissingDependency


def test_all_tools_present(which_all):
    check_dependencies(["openssl", "sudo"], which=which_all)


def test_missing_tool_is_named():
    which = lambda name: None if name == "openssl" else f"/bin/{name}"

    with pytest.raises(MissingDependency) as exc_info:
        check_dependencies(["openssl"], which=which)

    assert exc_info.value.name == "openssl"
    assert "openssl" in str(exc_info.value)


def test_first_missing_tool_wins():
    with pytest.raises(MissingDependency) as exc_info:
        check_dependencies(["sudo", "openssl"], which=lambda name: None)

    assert exc_info.value.name == "sudo"


def test_missing_os_primitive(monkeypatch, which_all):
    monkeypatch.delattr(os, "chown")

    with pytest.raises(MissingDependency) as exc_info:
        check_dependencies(["openssl"], which=which_all)

    assert exc_info.value.name == "chown"
