import subprocess

import pytest

from kafka_acl_profiles.acls import ResourcePatterns
from kafka_acl_profiles.config.config import RunSettings
from kafka_acl_profiles.errors import AclCommandError, AclToolNotFoundError, InvalidProfileError
from kafka_acl_profiles.processing import AclCommandRunner, build_commands


def settings_for(kafka_bin, **kwargs) -> RunSettings:
    return RunSettings(kafka_bin=str(kafka_bin), **kwargs)


def test_runs_admin_rules_in_order(kafka_bin, invocations):
    AclCommandRunner(settings_for(kafka_bin)).run()
    calls = invocations()
    assert len(calls) == 6
    assert calls[0] == (
        "--bootstrap-server localhost:9093 --add --allow-principal User:poweruser "
        "--operation Alter --operation Describe --operation ClusterAction "
        "--operation IdempotentWrite --cluster"
    )
    assert calls[2].endswith("--topic * --resource-pattern-type literal")
    assert calls[5].endswith("--user * --resource-pattern-type literal")


def test_stops_on_first_failure(kafka_bin, invocations, monkeypatch):
    monkeypatch.setenv("ACL_STUB_FAIL_ON", "--group")
    monkeypatch.setenv("ACL_STUB_EXIT", "4")
    with pytest.raises(AclCommandError) as error:
        AclCommandRunner(settings_for(kafka_bin)).run()
    assert error.value.returncode == 4
    assert error.value.exit_code == 4
    assert "--group" in error.value.command
    calls = invocations()
    assert len(calls) == 4
    assert "--group" in calls[-1]


def test_dry_run_never_invokes_the_tool(kafka_bin, invocations, monkeypatch):
    def _fail(*args, **kwargs):
        raise AssertionError("subprocess.run must not be called in dry-run")

    monkeypatch.setattr(subprocess, "run", _fail)
    printed: list[str] = []
    settings = settings_for(
        kafka_bin, dry_run=True, patterns=ResourcePatterns(topic="teamA-")
    )
    AclCommandRunner(settings, printer=printed.append).run()
    assert invocations() == []
    assert len(printed) == 6
    assert all(_line.startswith("[DRY-RUN] ") for _line in printed)
    assert printed[2].endswith("--topic teamA- --resource-pattern-type prefixed")


def test_list_ignores_profile_and_remove(kafka_bin, invocations):
    settings = settings_for(
        kafka_bin, list_only=True, remove=True, mode="broker-zk", strict=True
    )
    commands = build_commands(settings)
    assert len(commands) == 1
    assert commands[0].args[-1] == "--list"
    AclCommandRunner(settings).run()
    assert invocations() == ["--bootstrap-server localhost:9093 --list"]


def test_remove_uses_remove_flag(kafka_bin, invocations):
    AclCommandRunner(settings_for(kafka_bin, remove=True, mode="broker-kraft")).run()
    calls = invocations()
    assert len(calls) == 4
    assert all(" --remove " in _call for _call in calls)
    assert not any("--add" in _call for _call in calls)


def test_broker_zk_and_kraft_emit_same_commands(kafka_bin):
    for strict in (True, False):
        zk = build_commands(settings_for(kafka_bin, mode="broker-zk", strict=strict))
        kraft = build_commands(settings_for(kafka_bin, mode="broker-kraft", strict=strict))
        assert zk == kraft


def test_missing_tool_is_reported_before_any_invocation(tmp_path, invocations):
    with pytest.raises(AclToolNotFoundError):
        AclCommandRunner(settings_for(tmp_path / "missing")).run()
    assert invocations() == []


def test_non_executable_tool(kafka_bin, invocations):
    (kafka_bin / "kafka-acls.sh").chmod(0o644)
    with pytest.raises(AclToolNotFoundError):
        AclCommandRunner(settings_for(kafka_bin, dry_run=True), printer=print).run()


def test_invalid_profile_is_reported_before_any_invocation(kafka_bin, invocations):
    with pytest.raises(InvalidProfileError):
        AclCommandRunner(settings_for(kafka_bin, mode="broker")).run()
    assert invocations() == []


def test_tool_that_cannot_be_started(kafka_bin, invocations):
    tool = kafka_bin / "kafka-acls.sh"
    tool.write_text("exit 0\n")
    tool.chmod(0o755)
    with pytest.raises(AclToolNotFoundError) as error:
        AclCommandRunner(settings_for(kafka_bin)).run()
    assert error.value.tool_path == str(tool)
    assert error.value.reason
    assert error.value.exit_code == 1
