from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
import yaml
from typer.testing import CliRunner

from gardenctl.cli import app
from gardenctl.commands.completion import complete_project, complete_shoot, factory_from_params
from gardenctl.factory import Factory
from gardenctl.modules.target.models import Target

runner = CliRunner()


@pytest.fixture
def factory(target_file, lookup, gardenctl_config):
    return Factory(target_file=target_file, lookup=lookup, config=gardenctl_config)


def invoke(factory, args):
    return runner.invoke(app, args, obj=factory)


def test_help():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "target" in result.stdout
    assert "--garden" in result.stdout


def test_target_commands_exist():
    result = runner.invoke(app, ["target", "--help"])
    for command in ("garden", "project", "seed", "shoot", "unset", "view"):
        assert command in result.stdout


def test_target_garden_then_project(factory, file_provider):
    result = invoke(factory, ["target", "garden", "prod"])
    assert result.exit_code == 0, result.output
    assert "g1" in result.output

    result = invoke(factory, ["target", "project", "p2"])
    assert result.exit_code == 0, result.output
    assert file_provider.read() == Target(garden_name="g1", project_name="p2")


def test_target_shoot_with_flags(factory, file_provider):
    file_provider.write(Target(garden_name="g1"))
    result = invoke(factory, ["--garden", "g2", "--project", "p3", "target", "shoot", "other-b"])
    assert result.exit_code == 0, result.output
    assert file_provider.read() == Target(garden_name="g2", project_name="p3", shoot_name="other-b")


def test_unknown_name_fails(factory, file_provider):
    file_provider.write(Target(garden_name="g1"))
    result = invoke(factory, ["target", "seed", "eu"])
    assert result.exit_code == 1
    assert "seed 'eu' not found" in result.output
    assert file_provider.read() == Target(garden_name="g1")


def test_view_applies_flags_without_persisting(factory, file_provider):
    file_provider.write(Target(garden_name="g1", project_name="p1", shoot_name="shoot-a"))

    result = invoke(factory, ["--garden", "g2", "target", "view"])

    assert result.exit_code == 0, result.output
    assert yaml.safe_load(result.stdout) == {"garden": "g2"}
    assert file_provider.read() == Target(garden_name="g1", project_name="p1", shoot_name="shoot-a")


def test_view_empty(factory):
    result = invoke(factory, ["target", "view"])
    assert result.exit_code == 0
    assert "No target set" in result.stdout


def test_unset(factory, file_provider):
    file_provider.write(Target(garden_name="g1", seed_name="aws", shoot_name="shoot-a"))
    result = invoke(factory, ["target", "unset", "seed"])
    assert result.exit_code == 0, result.output
    assert file_provider.read() == Target(garden_name="g1")


def test_unset_rejects_unknown_level(factory):
    result = invoke(factory, ["target", "unset", "cluster"])
    assert result.exit_code != 0


def test_corrupt_target_file_is_reported(factory, target_file):
    target_file.parent.mkdir(parents=True)
    target_file.write_text("garden: [")
    result = invoke(factory, ["target", "view"])
    assert result.exit_code == 1
    assert "not valid YAML" in result.output


def _completion_context(obj=None, **params):
    root = SimpleNamespace(obj=obj, params=params)
    ctx = MagicMock()
    ctx.find_root.return_value = root
    return ctx


def test_factory_from_params_reads_global_options():
    factory = factory_from_params(_completion_context(garden="g2", seed="eu", config="/tmp/c.yaml"))
    assert factory.config_file == "/tmp/c.yaml"
    assert factory.target_flags.garden_name == "g2"
    assert factory.target_flags.seed_name == "eu"
    assert factory.target_flags.project_name == ""


def test_completion_callbacks(factory, file_provider):
    file_provider.write(Target(garden_name="g1", project_name="p1"))
    factory.target_flags.garden_name = "g2"

    assert complete_project(_completion_context(obj=factory), "") == ["p1", "p3"]
    assert complete_shoot(_completion_context(obj=factory), "oth") == ["other-a"]


def test_debug_option_runs_commands(factory):
    result = invoke(factory, ["--debug", "target", "view"])
    assert result.exit_code == 0, result.output
    assert "No target set" in result.stdout


def test_factory_without_target_flags(factory, file_provider):
    persisted = Target(garden_name="g1", project_name="p1", shoot_name="shoot-a")
    file_provider.write(persisted)
    factory.target_flags.garden_name = "g2"

    flagless = factory.without_target_flags()

    assert flagless.target_flags.is_empty()
    assert flagless.lookup() is factory.lookup()
    assert flagless.config() is factory.config()
    assert flagless.manager().current_target() == persisted
    assert factory.manager().current_target() == Target(garden_name="g2")
    assert factory.target_flags.garden_name == "g2"


def test_completion_does_not_promote_persisted_target(factory, file_provider):
    file_provider.write(Target(garden_name="g1", seed_name="gcp"))
    factory.target_flags.shoot_name = "shoot-b"

    assert complete_shoot(_completion_context(obj=factory), "shoot-") == ["shoot-b", "shoot-c"]
    assert file_provider.read() == Target(garden_name="g1", seed_name="gcp")
