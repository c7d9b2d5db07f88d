#  SPDX-License-Identifier: MPL-2.0
#  Copyright 2024 John Mille <john@ews-network.net>

"""
ACL profiles, as ordered tuples of rule templates.

admin        : operations/CI user with administrative powers through ACLs, without super.users
broker-zk    : broker principal in ZooKeeper mode, when super.users cannot be used
broker-kraft : broker principal in KRaft mode, when super.users cannot be used

Both broker modes need the same data/control ACLs, so they resolve to the same rule sets.
"""

from __future__ import annotations

from confluent_kafka.admin import AclOperation

from kafka_acl_profiles.acls import AclRuleTemplate, PatternSource, ResourceKind
from kafka_acl_profiles.errors import InvalidProfileError

ADMIN: str = "admin"
BROKER_ZK: str = "broker-zk"
BROKER_KRAFT: str = "broker-kraft"

INTERNAL_TOPICS: tuple[str, ...] = ("__consumer_offsets", "__transaction_state")

ADMIN_RULES: tuple[AclRuleTemplate, ...] = (
    AclRuleTemplate(
        "cluster-admin",
        (
            AclOperation.ALTER,
            AclOperation.DESCRIBE,
            AclOperation.CLUSTER_ACTION,
            AclOperation.IDEMPOTENT_WRITE,
        ),
        ResourceKind.CLUSTER,
    ),
    AclRuleTemplate(
        "cluster-configs",
        (AclOperation.ALTER_CONFIGS, AclOperation.DESCRIBE_CONFIGS),
        ResourceKind.CLUSTER,
    ),
    AclRuleTemplate(
        "topics",
        (
            AclOperation.CREATE,
            AclOperation.DELETE,
            AclOperation.ALTER,
            AclOperation.DESCRIBE,
            AclOperation.DESCRIBE_CONFIGS,
            AclOperation.ALTER_CONFIGS,
        ),
        ResourceKind.TOPIC,
        PatternSource.TOPIC,
    ),
    AclRuleTemplate(
        "consumer-groups",
        (AclOperation.DESCRIBE, AclOperation.DELETE, AclOperation.READ),
        ResourceKind.GROUP,
        PatternSource.GROUP,
    ),
    AclRuleTemplate(
        "transactional-ids",
        (AclOperation.DESCRIBE, AclOperation.WRITE),
        ResourceKind.TRANSACTIONAL_ID,
        PatternSource.TRANSACTIONAL_ID,
    ),
    # quotas and SCRAM credentials, entity-type users
    AclRuleTemplate(
        "users",
        (AclOperation.ALTER, AclOperation.DESCRIBE),
        ResourceKind.USER,
        PatternSource.USER,
    ),
)

BROKER_CLUSTER_RULE = AclRuleTemplate(
    "cluster-control",
    (
        AclOperation.DESCRIBE,
        AclOperation.CLUSTER_ACTION,
        AclOperation.IDEMPOTENT_WRITE,
    ),
    ResourceKind.CLUSTER,
)

BROKER_INTERNAL_TOPICS_RULES: tuple[AclRuleTemplate, ...] = tuple(
    AclRuleTemplate(
        f"internal-topic:{_topic}",
        (AclOperation.READ, AclOperation.WRITE, AclOperation.CREATE),
        ResourceKind.TOPIC,
        PatternSource.FIXED,
        fixed_name=_topic,
    )
    for _topic in INTERNAL_TOPICS
)

BROKER_MINIMAL_RULES: tuple[AclRuleTemplate, ...] = (
    BROKER_CLUSTER_RULE,
    # replication/metadata on data topics
    AclRuleTemplate(
        "data-topics-read",
        (AclOperation.READ, AclOperation.DESCRIBE),
        ResourceKind.TOPIC,
        PatternSource.TOPIC,
    ),
    *BROKER_INTERNAL_TOPICS_RULES,
)

BROKER_WIDE_RULES: tuple[AclRuleTemplate, ...] = (
    BROKER_CLUSTER_RULE,
    # avoids denials on reassignments, config changes and partitions changes
    AclRuleTemplate(
        "data-topics-wide",
        (
            AclOperation.READ,
            AclOperation.WRITE,
            AclOperation.DESCRIBE,
            AclOperation.ALTER,
            AclOperation.ALTER_CONFIGS,
            AclOperation.DESCRIBE_CONFIGS,
        ),
        ResourceKind.TOPIC,
        PatternSource.TOPIC,
    ),
    *BROKER_INTERNAL_TOPICS_RULES,
)

PROFILES: dict[str, dict[bool, tuple[AclRuleTemplate, ...]]] = {
    ADMIN: {True: ADMIN_RULES, False: ADMIN_RULES},
    BROKER_ZK: {True: BROKER_MINIMAL_RULES, False: BROKER_WIDE_RULES},
    BROKER_KRAFT: {True: BROKER_MINIMAL_RULES, False: BROKER_WIDE_RULES},
}

PROFILE_NAMES: tuple[str, ...] = tuple(PROFILES.keys())


def select_templates(profile: str, strict: bool = False) -> tuple[AclRuleTemplate, ...]:
    """
    Returns the rule templates of the profile. ``strict`` only changes the broker profiles,
    from the wide set to the minimal one.
    """
    if profile not in PROFILES:
        raise InvalidProfileError(profile, PROFILE_NAMES)
    return PROFILES[profile][bool(strict)]
