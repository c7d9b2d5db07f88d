#  SPDX-License-Identifier: MPL-2.0
#  Copyright 2024 John Mille <john@ews-network.net>

from __future__ import annotations

import shlex
from dataclasses import dataclass, field
from os import path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kafka_acl_profiles.acls import AclRule

ACL_TOOL_NAME: str = "kafka-acls.sh"
DRY_RUN_PREFIX: str = "[DRY-RUN]"


def acl_tool_path(kafka_bin: str) -> str:
    return path.join(kafka_bin.rstrip("/") or "/", ACL_TOOL_NAME)


@dataclass(frozen=True)
class CommandContext:
    tool_path: str
    bootstrap: str
    command_config: str | None = None

    @property
    def common_flags(self) -> list[str]:
        flags: list[str] = ["--bootstrap-server", self.bootstrap]
        if self.command_config:
            flags += ["--command-config", self.command_config]
        return flags


@dataclass(frozen=True)
class AclCommand:
    """A kafka-acls.sh invocation, as the argument vector handed to the process"""

    args: tuple[str, ...]
    description: str = field(default="", compare=False)

    def dry_run_line(self) -> str:
        return f"{DRY_RUN_PREFIX} {shlex.join(self.args)}"

    def __str__(self):
        return shlex.join(self.args)


def build_invocation(rule: AclRule, context: CommandContext) -> AclCommand:
    return AclCommand(
        (context.tool_path, *context.common_flags, *rule.to_args()),
        rule.template.name,
    )


def build_list_invocation(context: CommandContext) -> AclCommand:
    return AclCommand((context.tool_path, *context.common_flags, "--list"), "list")
