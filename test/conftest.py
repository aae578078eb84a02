"""Shared fixtures for the configdata test suite."""

import pytest

from configdata.binder import Binder
from configdata.formats.base import FormatLoaderBase, PropertySource
from configdata.resolver import (
    ConfigDataLocationResolverContext,
    StandardConfigDataLocationResolver,
)


class FakeFormatLoader(FormatLoaderBase):
    """Format loader which recognizes arbitrary extensions.

    Each resource is read as a single property holding its raw content.
    """

    def __init__(self, name, extensions):
        self.name = name
        self.file_extensions = tuple(extensions)

    def load(self, name, resource):
        content = resource.read_bytes().decode("utf-8")
        return [PropertySource(name, {"content": content})]


@pytest.fixture(name="touch")
def fixture_touch(workspace):
    """Returns a function which writes a file relative to the workspace."""

    def touch(path, content=""):
        target = workspace / path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")

        return target

    return touch


@pytest.fixture(name="workspace")
def fixture_workspace(tmp_path, monkeypatch):
    """Empty working directory, relative locations are resolved against it.

    Parameters
    ----------
    tmp_path : str
       Generic pytest fixture used to handle temporary test files
    monkeypatch : MonkeyPatch
       Generic pytest fixture used to change the working directory
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("CONFIGDATA_CONFIG_NAME", raising=False)

    return tmp_path


@pytest.fixture(name="fake_loaders")
def fixture_fake_loaders():
    """Two fake format loaders, L1 (e1a, e1b) registered before L2 (e2a)."""
    return (
        FakeFormatLoader("l1", ["e1a", "e1b"]),
        FakeFormatLoader("l2", ["e2a"]),
    )


@pytest.fixture(name="context")
def fixture_context():
    """Resolution context with no parent resource."""
    return ConfigDataLocationResolverContext(binder=Binder(environ={}))


@pytest.fixture(name="resolver")
def fixture_resolver(workspace):
    """Standard resolver with the default format loaders."""
    return StandardConfigDataLocationResolver(binder=Binder(environ={}))


@pytest.fixture(name="make_loader")
def fixture_make_loader():
    """Returns the fake format loader class, to build custom ones."""
    return FakeFormatLoader
