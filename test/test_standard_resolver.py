"""Test the standard location resolver."""

import os

import pytest

from configdata.api import LOWEST_PRECEDENCE
from configdata.binder import Binder
from configdata.errors import (
    ConfigDataLocationNotFoundError,
    ConfigDataResolutionError,
    InvalidConfigDataPropertyError,
    UnknownFileExtensionError,
)
from configdata.location import ConfigDataLocation
from configdata.resolver import (
    ConfigDataLocationResolverContext,
    StandardConfigDataLocationResolver,
)
from configdata.utils.logger import logger


def paths(resources):
    """Absolute paths of resolved resources, in order."""
    return [resource.resource.absolute_path for resource in resources]


def of(location):
    return ConfigDataLocation.of(location)


class TestConstruction:
    """Tests for the resolver construction-time inputs."""

    def test_defaults(self, resolver):
        assert resolver.config_names == ("application",)
        assert [loader.name for loader in resolver.format_loaders] == ["properties", "yaml"]
        assert resolver.is_resolvable(None, of("anything:at/all"))
        assert resolver.order == LOWEST_PRECEDENCE

    def test_config_names(self, workspace):
        resolver = StandardConfigDataLocationResolver(
            binder=Binder({"config": {"name": "app, shared"}}, environ={})
        )
        assert resolver.config_names == ("app", "shared")

    def test_config_names_environment(self, workspace, monkeypatch):
        monkeypatch.setenv("CONFIGDATA_CONFIG_NAME", "app")
        assert StandardConfigDataLocationResolver().config_names == ("app",)

    def test_invalid_config_name(self, workspace):
        """Base names cannot be patterns."""
        binder = Binder({"config.name": ["app", "app-*"]}, environ={})
        with pytest.raises(InvalidConfigDataPropertyError, match="cannot contain"):
            StandardConfigDataLocationResolver(binder=binder)


class TestFileLocations:
    """Tests for explicitly named files."""

    def test_existing_file(self, resolver, context, touch):
        """An existing file resolves to exactly one existing resource."""
        path = touch("config/app.properties", "a=1\n")
        resources = resolver.resolve(context, of("config/app.properties"))
        assert len(resources) == 1
        assert resources[0].exists()
        assert not resources[0].empty_directory
        assert resources[0].resource.absolute_path == str(path)

        reference = resources[0].reference
        assert reference.extension == "properties"
        assert reference.directory is None
        assert reference.root == "config/app"
        assert reference.format_loader.name == "properties"

    def test_extension_case(self, resolver, context, touch):
        """Extensions are matched ignoring case, the file's own text is kept."""
        touch("config/APP.YML")
        resources = resolver.resolve(context, of("config/APP.YML"))
        assert resources[0].reference.extension == "YML"
        assert resources[0].reference.format_loader.name == "yaml"
        assert resources[0].exists()

    def test_missing_mandatory_file(self, resolver, context):
        """A missing mandatory file is returned, for the consumer to report."""
        resources = resolver.resolve(context, of("config/missing.yml"))
        assert len(resources) == 1
        assert not resources[0].exists()

    def test_missing_optional_file(self, resolver, context):
        assert resolver.resolve(context, of("optional:config/missing.yml")) == []

    def test_unknown_extension(self, workspace, context, make_loader, touch):
        """An unrecognized extension fails, unless a hint is provided."""
        touch("config/app.properties")
        touch("config/app")
        resolver = StandardConfigDataLocationResolver(
            binder=Binder(environ={}), format_loaders=[make_loader("custom", ["custom"])]
        )
        with pytest.raises(UnknownFileExtensionError, match="app.properties"):
            resolver.resolve(context, of("config/app.properties"))

        resources = resolver.resolve(context, of("config/app[.custom]"))
        assert len(resources) == 1
        assert resources[0].exists()
        assert resources[0].reference.extension is None
        assert resources[0].reference.format_loader.name == "custom"
        assert resources[0].reference.resource_location == "config/app"

    def test_unknown_extension_is_not_wrapped(self, resolver, context):
        with pytest.raises(UnknownFileExtensionError) as excinfo:
            resolver.resolve(context, of("config/app.txt"))
        assert excinfo.value.location == of("config/app.txt")

    def test_extension_hint_case(self, resolver, context, touch):
        touch("config/app")
        resources = resolver.resolve(context, of("config/app[.YAML]"))
        assert resources[0].reference.format_loader.name == "yaml"
        assert resources[0].reference.extension is None

    def test_resource_prefix(self, resolver, context, touch):
        path = touch("config/app.yml")
        resources = resolver.resolve(context, of("resource:config/app.yml"))
        assert paths(resources) == [str(path)]

    def test_file_url(self, resolver, context, touch, workspace):
        path = touch("config/app.yml")
        resources = resolver.resolve(context, of(f"file:{workspace}/config/app.yml"))
        assert paths(resources) == [str(path)]

    def test_package_file(self, workspace, context, make_loader):
        """Files shipped in packages are resolved as well."""
        resolver = StandardConfigDataLocationResolver(
            binder=Binder(environ={}), format_loaders=[make_loader("python", ["py"])]
        )
        resources = resolver.resolve(context, of("package:configdata/api.py"))
        assert len(resources) == 1
        assert resources[0].exists()

    def test_parent_relative(self, resolver, touch):
        """Relative locations nested in a resource are relative to it."""
        touch("config/app.yml")
        extra = touch("config/extra.yml")
        parent = resolver.resolve(
            ConfigDataLocationResolverContext(), of("config/app.yml")
        )[0]

        context = ConfigDataLocationResolverContext(parent=parent)
        assert paths(resolver.resolve(context, of("extra.yml"))) == [str(extra)]

    def test_parent_absolute(self, resolver, touch, workspace):
        """Absolute locations ignore the parent."""
        touch("config/app.yml")
        other = touch("other/extra.yml")
        parent = resolver.resolve(
            ConfigDataLocationResolverContext(), of("config/app.yml")
        )[0]

        context = ConfigDataLocationResolverContext(parent=parent)
        resources = resolver.resolve(context, of(f"{workspace}/other/extra.yml"))
        assert paths(resources) == [str(other)]


class TestDirectoryLocations:
    """Tests for directory scans."""

    def test_candidates(self, resolver, context, touch):
        """Only existing candidates are kept, the others are skipped silently."""
        yml = touch("config/application.yml")
        properties = touch("config/application.properties")
        resources = resolver.resolve(context, of("config/"))
        assert paths(resources) == [str(yml), str(properties)]
        assert [r.reference.directory for r in resources] == ["config/", "config/"]

    def test_default_precedence(self, resolver, context, touch):
        """The loader and extension registered last are probed first."""
        names = ["properties", "xml", "yml", "yaml"]
        for extension in names:
            touch(f"config/application.{extension}")

        resources = resolver.resolve(context, of("config/"))
        assert [r.reference.extension for r in resources] == names[::-1]

    def test_reverse_precedence(self, workspace, context, fake_loaders, touch):
        """Candidates are probed in reverse registration order."""
        for extension in ["e1a", "e1b", "e2a"]:
            touch(f"config/app.{extension}")

        resolver = StandardConfigDataLocationResolver(
            binder=Binder({"config.name": "app"}, environ={}),
            format_loaders=fake_loaders,
        )
        resources = resolver.resolve(context, of("config/"))
        assert [r.reference.extension for r in resources] == ["e2a", "e1b", "e1a"]
        assert [r.reference.format_loader.name for r in resources] == ["l2", "l1", "l1"]

    def test_reverse_precedence_partial(self, workspace, context, fake_loaders, touch):
        e1a = touch("config/app.e1a")
        e2a = touch("config/app.e2a")
        resolver = StandardConfigDataLocationResolver(
            binder=Binder({"config.name": "app"}, environ={}),
            format_loaders=fake_loaders,
        )
        assert paths(resolver.resolve(context, of("config/"))) == [str(e2a), str(e1a)]

    def test_shared_extension(self, workspace, context, make_loader, touch):
        """A reference reached twice is only probed once."""
        touch("config/app.ext")
        loader = make_loader("dup", ["ext"])
        resolver = StandardConfigDataLocationResolver(
            binder=Binder({"config.name": "app"}, environ={}),
            format_loaders=[loader, loader],
        )
        assert len(resolver.resolve(context, of("config/"))) == 1

    def test_config_names_order(self, workspace, context, touch):
        """Names keep their configured order."""
        shared = touch("config/shared.yml")
        app = touch("config/app.properties")
        resolver = StandardConfigDataLocationResolver(
            binder=Binder({"config.name": "app,shared"}, environ={})
        )
        assert paths(resolver.resolve(context, of("config/"))) == [str(app), str(shared)]

    def test_empty_directory(self, resolver, context, touch, workspace):
        """An existing directory with no candidate yields one placeholder."""
        touch("config/other.txt")
        resources = resolver.resolve(context, of("config/"))
        assert len(resources) == 1
        assert resources[0].empty_directory
        assert resources[0].resource.is_directory()
        assert resources[0].resource.absolute_path == str(workspace / "config")
        assert resources[0].reference.directory == "config/"

    def test_missing_directory(self, resolver, context):
        """Missing directories are skipped, mandatory or not."""
        assert resolver.resolve(context, of("missing/")) == []
        assert resolver.resolve(context, of("optional:missing/")) == []

    def test_os_separator(self, resolver, context, touch):
        path = touch("config/application.yml")
        resources = resolver.resolve(context, of("config" + os.sep))
        assert paths(resources) == [str(path)]

    def test_package_directory(self, resolver, context):
        """Package directories never produce placeholders."""
        assert resolver.resolve(context, of("optional:package:configdata/")) == []

    def test_skipping_is_logged(self, resolver, context, touch, caplog):
        touch("config/application.yml")
        caplog.set_level("DEBUG", logger=logger.name)
        resolver.resolve(context, of("config/"))
        assert "Skipping missing resource config/application.yaml" in caplog.text


class TestPatternLocations:
    """Tests for single-wildcard locations."""

    def test_directory_pattern(self, resolver, context, touch):
        """Every subdirectory is scanned, in sorted order."""
        b = touch("config/b/application.yml")
        a = touch("config/a/application.yml")
        resources = resolver.resolve(context, of("config/*/"))
        assert paths(resources) == [str(a), str(b)]

    def test_directory_pattern_precedence(self, resolver, context, touch):
        """Extension precedence comes before the subdirectory order."""
        b = touch("config/b/application.yml")
        a = touch("config/a/application.properties")
        resources = resolver.resolve(context, of("config/*/"))
        assert paths(resources) == [str(b), str(a)]

    def test_directory_pattern_placeholders(self, resolver, context, workspace):
        (workspace / "config" / "b").mkdir(parents=True)
        (workspace / "config" / "a").mkdir(parents=True)
        resources = resolver.resolve(context, of("config/*/"))
        assert all(r.empty_directory for r in resources)
        assert paths(resources) == [
            str(workspace / "config" / "a"),
            str(workspace / "config" / "b"),
        ]

    def test_mandatory_pattern_no_match(self, resolver, context, workspace):
        """A mandatory pattern without subdirectory fails, an optional one does not."""
        (workspace / "config").mkdir()
        with pytest.raises(ConfigDataLocationNotFoundError, match="no subdirectories"):
            resolver.resolve(context, of("config/*/"))

        assert resolver.resolve(context, of("optional:config/*/")) == []

    def test_mandatory_file_pattern_no_match(self, resolver, context, touch):
        touch("config/a/other.yml")
        with pytest.raises(ConfigDataLocationNotFoundError) as excinfo:
            resolver.resolve(context, of("config/*/app.yml"))
        assert excinfo.value.location == of("config/*/app.yml")

        assert resolver.resolve(context, of("optional:config/*/app.yml")) == []

    def test_file_pattern(self, resolver, context, touch):
        b = touch("config/b/app.yml")
        a = touch("config/a/app.yml")
        touch("config/c/other.yml")
        resources = resolver.resolve(context, of("config/*/app.yml"))
        assert paths(resources) == [str(a), str(b)]
        assert all(r.reference.extension == "yml" for r in resources)

    @pytest.mark.parametrize("location", ["config/*/x/app.yml", "config/*/x/"])
    def test_invalid_pattern(self, resolver, context, workspace, location):
        """Malformed patterns fail with the location they come from."""
        (workspace / "config" / "a").mkdir(parents=True)
        with pytest.raises(ConfigDataResolutionError, match=r"config/\*/x/") as excinfo:
            resolver.resolve(context, of(location))
        assert excinfo.value.location == of(location)
        assert isinstance(excinfo.value.__cause__, ValueError)


class TestCompoundLocations:
    """Tests for `;` separated locations and profiles."""

    def test_order(self, resolver, context, touch):
        """Sub-locations resolve one after the other, never interleaved."""
        a_yml = touch("a/application.yml")
        a_props = touch("a/application.properties")
        b_yml = touch("b/application.yml")
        b_props = touch("b/application.properties")

        resources = resolver.resolve(context, of("a/;b/"))
        assert paths(resources) == [str(a_yml), str(a_props), str(b_yml), str(b_props)]

        resources = resolver.resolve(context, of("b/;a/"))
        assert paths(resources) == [str(b_yml), str(b_props), str(a_yml), str(a_props)]

    def test_duplicate_sub_locations(self, resolver, context, touch):
        path = touch("a/application.yml")
        assert paths(resolver.resolve(context, of("a/;a/"))) == [str(path)]

    def test_mixed(self, resolver, context, touch, workspace):
        """Each sub-location falls back on its own placeholder."""
        touch("a/other.txt")
        b = touch("b/application.yml")
        resources = resolver.resolve(context, of("a/;b/;optional:c/app.yml"))
        assert [r.empty_directory for r in resources] == [True, False]
        assert paths(resources) == [str(workspace / "a"), str(b)]

    def test_profiles(self, resolver, context, touch):
        """Profiles are visited in order, each across every sub-location."""
        a_p1 = touch("a/application-p1.yml")
        b_p1 = touch("b/application-p1.yml")
        a_p2 = touch("a/application-p2.properties")
        b_p2 = touch("b/application-p2.yml")
        touch("a/application.yml")

        resources = resolver.resolve_profile_specific(context, of("a/;b/"), ["p1", "p2"])
        assert paths(resources) == [str(a_p1), str(b_p1), str(a_p2), str(b_p2)]
        assert [r.profile for r in resources] == ["p1", "p1", "p2", "p2"]

    def test_profile_placeholders(self, resolver, context, touch, workspace):
        """A directory with no profile variant is reported once as empty."""
        a_p1 = touch("a/application-p1.yml")
        resources = resolver.resolve_profile_specific(context, of("a/"), ["p1", "p2"])
        assert paths(resources) == [str(a_p1), str(workspace / "a")]
        assert [r.empty_directory for r in resources] == [False, True]

    def test_profile_file(self, resolver, context, touch):
        """Profile variants of explicit files are skipped when missing."""
        touch("config/app.yml")
        dev = touch("config/app-dev.yml")
        resources = resolver.resolve_profile_specific(
            context, of("config/app.yml"), ["dev", "prod"]
        )
        assert paths(resources) == [str(dev)]

    def test_profile_hint(self, resolver, context, touch):
        dev = touch("config/app-dev")
        resources = resolver.resolve_profile_specific(
            context, of("config/app[.yml]"), ["dev"]
        )
        assert paths(resources) == [str(dev)]

    def test_deterministic(self, resolver, context, touch, workspace):
        """Identical inputs produce identical output."""
        touch("a/application.yml")
        touch("a/application-dev.properties")
        touch("b/x/application.yml")
        (workspace / "b" / "y").mkdir()
        touch("c/other.txt")

        location = of("a/;b/*/;c/;optional:d/")
        first = resolver.resolve(context, location)
        second = resolver.resolve(context, location)
        assert first == second
        assert [str(r) for r in first] == [str(r) for r in second]

        first = resolver.resolve_profile_specific(context, location, ["dev"])
        second = resolver.resolve_profile_specific(context, location, ["dev"])
        assert first == second


class TestErrorWrapping:
    """Tests for unexpected failures while resolving locations."""

    def test_wrapped(self, workspace, context):
        class BrokenLoader:
            name = "broken"

            @property
            def file_extensions(self):
                raise RuntimeError("broken loader")

        resolver = StandardConfigDataLocationResolver(
            binder=Binder(environ={}), format_loaders=[BrokenLoader()]
        )
        with pytest.raises(ConfigDataResolutionError, match="'b/'") as excinfo:
            resolver.resolve(context, of("b/"))
        assert isinstance(excinfo.value.__cause__, RuntimeError)
        assert excinfo.value.location == of("b/")

        with pytest.raises(ConfigDataResolutionError):
            resolver.resolve_profile_specific(context, of("b/"), ["dev"])

    @pytest.mark.parametrize(
        "location", ["classpath:config/", "classpath:config/app.yml", "classpath:config/*/"]
    )
    def test_unsupported_scheme(self, resolver, context, location):
        """Schemes the resource loader cannot read fail for mandatory locations."""
        with pytest.raises(ConfigDataResolutionError, match="classpath:config/") as excinfo:
            resolver.resolve(context, of(location))
        assert isinstance(excinfo.value.__cause__, ValueError)

    @pytest.mark.parametrize(
        "location", ["classpath:config/", "classpath:config/app.yml", "classpath:config/*/"]
    )
    def test_unsupported_scheme_optional(self, resolver, context, location):
        """Optional locations with such schemes are treated as missing."""
        location = of("optional:" + location)
        assert resolver.resolve(context, location) == []
        assert resolver.resolve_profile_specific(context, location, ["dev"]) == []
