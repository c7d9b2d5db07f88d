import pytest
from confluent_kafka.admin import AclOperation

from kafka_acl_profiles.acls import PatternSource, ResourceKind
from kafka_acl_profiles.acls.profiles import (
    ADMIN,
    BROKER_KRAFT,
    BROKER_ZK,
    INTERNAL_TOPICS,
    PROFILE_NAMES,
    select_templates,
)
from kafka_acl_profiles.errors import ConfigurationError, InvalidProfileError


def test_profile_names():
    assert PROFILE_NAMES == ("admin", "broker-zk", "broker-kraft")


@pytest.mark.parametrize("strict", [True, False])
def test_admin_has_six_rules_whatever_strict(strict):
    templates = select_templates(ADMIN, strict)
    assert [_t.kind for _t in templates] == [
        ResourceKind.CLUSTER,
        ResourceKind.CLUSTER,
        ResourceKind.TOPIC,
        ResourceKind.GROUP,
        ResourceKind.TRANSACTIONAL_ID,
        ResourceKind.USER,
    ]


@pytest.mark.parametrize("strict", [True, False])
def test_broker_modes_are_identical(strict):
    assert select_templates(BROKER_ZK, strict) == select_templates(BROKER_KRAFT, strict)


def test_broker_strict_rules():
    templates = select_templates(BROKER_ZK, strict=True)
    assert len(templates) == 4
    cluster, data_topics, *internal = templates
    assert cluster.kind is ResourceKind.CLUSTER
    assert cluster.operations == (
        AclOperation.DESCRIBE,
        AclOperation.CLUSTER_ACTION,
        AclOperation.IDEMPOTENT_WRITE,
    )
    assert data_topics.source is PatternSource.TOPIC
    assert data_topics.operations == (AclOperation.READ, AclOperation.DESCRIBE)
    assert tuple(_t.fixed_name for _t in internal) == INTERNAL_TOPICS
    for _template in internal:
        assert _template.operations == (
            AclOperation.READ,
            AclOperation.WRITE,
            AclOperation.CREATE,
        )


def test_broker_wide_only_changes_data_topics_rule():
    strict = select_templates(BROKER_KRAFT, strict=True)
    wide = select_templates(BROKER_KRAFT, strict=False)
    assert wide[0] == strict[0]
    assert wide[2:] == strict[2:]
    assert wide[1].operations == (
        AclOperation.READ,
        AclOperation.WRITE,
        AclOperation.DESCRIBE,
        AclOperation.ALTER,
        AclOperation.ALTER_CONFIGS,
        AclOperation.DESCRIBE_CONFIGS,
    )


def test_invalid_profile():
    with pytest.raises(InvalidProfileError) as error:
        select_templates("superuser")
    assert isinstance(error.value, ConfigurationError)
    assert "superuser" in str(error.value)
    assert "admin | broker-zk | broker-kraft" in str(error.value)
