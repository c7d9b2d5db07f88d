#  SPDX-License-Identifier: MPL-2.0
#  Copyright 2024 John Mille <john@ews-network.net>

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kafka_acl_profiles.specs.config import AclProfilesInputConfiguration

from dataclasses import dataclass, field, fields, replace

from compose_x_common.compose_x_common import keyisset

from kafka_acl_profiles.acls import PRINCIPAL_TYPE, ResourcePatterns, principal_for
from kafka_acl_profiles.acls.commands import CommandContext, acl_tool_path
from kafka_acl_profiles.acls.profiles import ADMIN
from kafka_acl_profiles.errors import ConfigurationError

ENV_VARS: dict[str, str] = {
    "BOOTSTRAP": "bootstrap",
    "PRINCIPAL_USER": "principal_user",
    "MODE": "mode",
    "KAFKA_BIN": "kafka_bin",
    "COMMAND_CONFIG": "command_config",
}

PATTERNS_ENV_VARS: dict[str, str] = {
    "TOPIC_PATTERN": "topic",
    "GROUP_PATTERN": "group",
    "TXNID_PATTERN": "transactional_id",
    "USER_ENTITY_PATTERN": "user",
}


@dataclass(frozen=True)
class RunSettings:
    """Settings of one run, resolved from defaults, env vars, config file and CLI flags"""

    bootstrap: str = "localhost:9093"
    principal_user: str = "poweruser"
    mode: str = ADMIN
    patterns: ResourcePatterns = field(default_factory=ResourcePatterns)
    kafka_bin: str = "/opt/kafka/bin"
    command_config: str | None = None
    strict: bool = False
    remove: bool = False
    list_only: bool = False
    dry_run: bool = False

    @property
    def principal(self) -> str:
        return principal_for(self.principal_user)

    @property
    def tool_path(self) -> str:
        return acl_tool_path(self.kafka_bin)

    @property
    def command_context(self) -> CommandContext:
        return CommandContext(self.tool_path, self.bootstrap, self.command_config)

    def validate(self) -> None:
        if not self.bootstrap:
            raise ConfigurationError("bootstrap server cannot be empty")
        if not self.principal_user:
            raise ConfigurationError("principal cannot be empty")
        if self.principal_user.startswith(f"{PRINCIPAL_TYPE}:"):
            raise ConfigurationError(
                f"principal must be given without the '{PRINCIPAL_TYPE}:' prefix, "
                f"got {self.principal_user}"
            )
        if not self.kafka_bin:
            raise ConfigurationError("Kafka bin directory cannot be empty")
        for _pattern in fields(self.patterns):
            if not getattr(self.patterns, _pattern.name):
                raise ConfigurationError(f"{_pattern.name} pattern cannot be empty")


def settings_from_env(settings: RunSettings, environ: dict) -> RunSettings:
    """Empty env vars are ignored and the defaults are kept."""
    environ = dict(environ)
    overrides: dict = {
        attr: environ[env_var]
        for env_var, attr in ENV_VARS.items()
        if keyisset(env_var, environ)
    }
    patterns: dict = {
        attr: environ[env_var]
        for env_var, attr in PATTERNS_ENV_VARS.items()
        if keyisset(env_var, environ)
    }
    if patterns:
        overrides["patterns"] = replace(settings.patterns, **patterns)
    return replace(settings, **overrides)


def settings_from_config_file(
    settings: RunSettings, config: AclProfilesInputConfiguration
) -> RunSettings:
    overrides: dict = {}
    if config.bootstrap is not None:
        overrides["bootstrap"] = config.bootstrap
    if config.principal is not None:
        overrides["principal_user"] = config.principal
    if config.mode is not None:
        overrides["mode"] = config.mode
    if config.strict is not None:
        overrides["strict"] = config.strict
    if config.kafka_bin is not None:
        overrides["kafka_bin"] = config.kafka_bin
    if config.command_config is not None:
        overrides["command_config"] = config.command_config or None
    if config.patterns:
        patterns: dict = {
            _field.name: getattr(config.patterns, _field.name)
            for _field in fields(config.patterns)
            if getattr(config.patterns, _field.name) is not None
        }
        overrides["patterns"] = replace(settings.patterns, **patterns)
    return replace(settings, **overrides)


def settings_from_args(settings: RunSettings, args: dict) -> RunSettings:
    """
    Applies the parsed CLI arguments. Options left to None were not set on the command line.
    Flags only ever switch a setting on.
    """
    overrides: dict = {
        attr: args[attr]
        for attr in ("bootstrap", "principal_user", "mode", "kafka_bin", "command_config")
        if args.get(attr) is not None
    }
    patterns: dict = {
        attr: args[f"{attr}_pattern"]
        for attr in ("topic", "group", "transactional_id", "user")
        if args.get(f"{attr}_pattern") is not None
    }
    if patterns:
        overrides["patterns"] = replace(settings.patterns, **patterns)
    for flag in ("strict", "remove", "list_only", "dry_run"):
        if args.get(flag):
            overrides[flag] = True
    return replace(settings, **overrides)


def resolve_settings(
    args: dict,
    environ: dict,
    file_config: AclProfilesInputConfiguration | None = None,
) -> RunSettings:
    settings = settings_from_env(RunSettings(), environ)
    if file_config is not None:
        settings = settings_from_config_file(settings, file_config)
    settings = settings_from_args(settings, args)
    settings.validate()
    return settings
