#  SPDX-License-Identifier: MPL-2.0
#  Copyright 2024 John Mille <john@ews-network.net>

"""Builds the kafka-acls.sh invocations of a run and executes (or prints) them in order."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kafka_acl_profiles.config.config import RunSettings

import os
import subprocess

from kafka_acl_profiles.acls import AclRule
from kafka_acl_profiles.acls.commands import (
    AclCommand,
    build_invocation,
    build_list_invocation,
)
from kafka_acl_profiles.acls.profiles import select_templates
from kafka_acl_profiles.config.logging import ACL_LOG
from kafka_acl_profiles.errors import AclCommandError, AclToolNotFoundError


def ensure_acl_tool(tool_path: str) -> None:
    if not os.path.isfile(tool_path) or not os.access(tool_path, os.X_OK):
        raise AclToolNotFoundError(tool_path)


def build_commands(settings: RunSettings) -> list[AclCommand]:
    """
    In list mode, the profile and the remove flag are ignored and a single --list invocation is returned.
    """
    context = settings.command_context
    if settings.list_only:
        return [build_list_invocation(context)]
    return [
        build_invocation(
            AclRule.from_template(
                template, settings.principal, settings.patterns, settings.remove
            ),
            context,
        )
        for template in select_templates(settings.mode, settings.strict)
    ]


class AclCommandRunner:
    """
    Runs kafka-acls.sh once per command, sequentially. The first non-zero exit status stops the run;
    ACLs already applied stay in place.
    """

    def __init__(self, settings: RunSettings, printer=print):
        self._settings = settings
        self._printer = printer

    @property
    def settings(self) -> RunSettings:
        return self._settings

    def execute(self, commands: list[AclCommand]) -> None:
        for command in commands:
            if self.settings.dry_run:
                self._printer(command.dry_run_line())
                continue
            ACL_LOG.debug("%s: %s", command.description, str(command))
            try:
                result = subprocess.run(list(command.args), check=False)
            except OSError as error:
                raise AclToolNotFoundError(command.args[0], str(error)) from error
            if result.returncode != 0:
                raise AclCommandError(result.returncode, list(command.args))

    def log_header(self) -> None:
        action = "--remove" if self.settings.remove else "--add"
        ACL_LOG.info(
            f"==> Profile: {self.settings.mode} | Principal: {self.settings.principal} "
            f"| Action: {action} | Bootstrap: {self.settings.bootstrap}"
        )
        if self.settings.command_config:
            ACL_LOG.info(f"    CLI auth: {self.settings.command_config}")

    def log_completion(self) -> None:
        ACL_LOG.info("==> Done. To list ACLs:")
        ACL_LOG.info(f"    {build_list_invocation(self.settings.command_context)}")

    def run(self) -> None:
        commands = build_commands(self.settings)
        ensure_acl_tool(self.settings.tool_path)
        if self.settings.list_only:
            self.execute(commands)
            return
        self.log_header()
        self.execute(commands)
        self.log_completion()
