#  SPDX-License-Identifier: MPL-2.0
#  Copyright 2024 John Mille <john@ews-network.net>

"""ACL rule model: resource kinds, pattern types and rule templates."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from confluent_kafka.admin import AclOperation, ResourcePatternType

WILDCARD: str = "*"
PRINCIPAL_TYPE: str = "User"


class ResourceKind(Enum):
    CLUSTER = "cluster"
    TOPIC = "topic"
    GROUP = "group"
    TRANSACTIONAL_ID = "transactional-id"
    USER = "user"

    @property
    def flag(self) -> str:
        return f"--{self.value}"

    @property
    def takes_value(self) -> bool:
        return self is not ResourceKind.CLUSTER


class PatternSource(Enum):
    """Where a rule template takes its resource name from"""

    NONE = "none"
    FIXED = "fixed"
    TOPIC = "topic"
    GROUP = "group"
    TRANSACTIONAL_ID = "transactional_id"
    USER = "user"


def resolve_pattern_type(pattern: str) -> ResourcePatternType:
    """`*` is matched literally by the authorizer; anything else is treated as a prefix."""
    if pattern == WILDCARD:
        return ResourcePatternType.LITERAL
    return ResourcePatternType.PREFIXED


def pattern_type_name(pattern_type: ResourcePatternType) -> str:
    return pattern_type.name.lower()


def operation_name(operation: AclOperation) -> str:
    """AclOperation.CLUSTER_ACTION -> ClusterAction, as kafka-acls.sh expects it"""
    return "".join(part.capitalize() for part in operation.name.split("_"))


def principal_for(user_name: str) -> str:
    return f"{PRINCIPAL_TYPE}:{user_name}"


@dataclass(frozen=True)
class AclRuleTemplate:
    name: str
    operations: tuple[AclOperation, ...]
    kind: ResourceKind
    source: PatternSource = PatternSource.NONE
    fixed_name: str | None = None

    def __post_init__(self):
        if not self.operations:
            raise ValueError(f"{self.name}: at least one operation is required")
        if (self.kind is ResourceKind.CLUSTER) != (self.source is PatternSource.NONE):
            raise ValueError(
                f"{self.name}: only cluster rules are defined without a resource name"
            )
        if (self.source is PatternSource.FIXED) != (self.fixed_name is not None):
            raise ValueError(f"{self.name}: fixed_name is required for fixed resources")


@dataclass(frozen=True)
class ResourcePatterns:
    topic: str = WILDCARD
    group: str = WILDCARD
    transactional_id: str = WILDCARD
    user: str = WILDCARD

    def for_source(self, source: PatternSource) -> str:
        return getattr(self, source.value)


@dataclass(frozen=True)
class AclRule:
    """A template resolved against the principal, the action and the resource patterns"""

    template: AclRuleTemplate
    principal: str
    remove: bool = False
    resource_name: str | None = None
    pattern_type: ResourcePatternType | None = None

    @classmethod
    def from_template(
        cls,
        template: AclRuleTemplate,
        principal: str,
        patterns: ResourcePatterns,
        remove: bool = False,
    ) -> AclRule:
        if template.source is PatternSource.NONE:
            return cls(template, principal, remove)
        if template.source is PatternSource.FIXED:
            return cls(template, principal, remove, template.fixed_name)
        pattern = patterns.for_source(template.source)
        return cls(
            template, principal, remove, pattern, resolve_pattern_type(pattern)
        )

    @property
    def action_flag(self) -> str:
        return "--remove" if self.remove else "--add"

    def to_args(self) -> list[str]:
        args: list[str] = [self.action_flag, "--allow-principal", self.principal]
        for operation in self.template.operations:
            args += ["--operation", operation_name(operation)]
        args.append(self.template.kind.flag)
        if self.template.kind.takes_value:
            args.append(self.resource_name)
        if self.pattern_type is not None:
            args += ["--resource-pattern-type", pattern_type_name(self.pattern_type)]
        return args
