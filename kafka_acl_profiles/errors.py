#  SPDX-License-Identifier: MPL-2.0
#  Copyright 2024 John Mille <john@ews-network.net>

"""Exceptions raised while resolving settings and applying ACLs."""

from __future__ import annotations


class AclProfilesError(Exception):
    """Base exception for kafka-acl-profiles"""

    exit_code: int = 1


class ConfigurationError(AclProfilesError):
    """Invalid settings, config file or environment. Raised before any ACL is touched."""


class InvalidProfileError(ConfigurationError):
    def __init__(self, profile: str, valid_profiles):
        self.profile = profile
        self.valid_profiles = tuple(valid_profiles)
        super().__init__(
            f"Invalid mode: {profile} (use {' | '.join(self.valid_profiles)})"
        )


class AclToolNotFoundError(ConfigurationError):
    def __init__(self, tool_path: str, reason: str | None = None):
        self.tool_path = tool_path
        self.reason = reason
        message = (
            f"kafka-acls.sh not found or not executable at '{tool_path}' "
            "(use -k to set the Kafka bin directory)"
        )
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class AclCommandError(AclProfilesError):
    """kafka-acls.sh returned a non-zero exit status"""

    def __init__(self, returncode: int, command: list[str]):
        self.returncode = returncode
        self.command = list(command)
        super().__init__(
            f"kafka-acls.sh exited with status {returncode}: {' '.join(self.command)}"
        )

    @property
    def exit_code(self) -> int:
        return self.returncode if self.returncode > 0 else 1
