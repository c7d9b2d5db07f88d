# SPDX-License-Identifier: MPL-2.0
# Copyright 2024 John Mille <john@ews-network.net>

import sys
from argparse import ArgumentParser, RawDescriptionHelpFormatter
from os import environ

from kafka_acl_profiles.acls.profiles import ADMIN, PROFILE_NAMES
from kafka_acl_profiles.config import load_config_file
from kafka_acl_profiles.config.config import resolve_settings
from kafka_acl_profiles.config.logging import ACL_LOG, set_verbose
from kafka_acl_profiles.errors import AclProfilesError
from kafka_acl_profiles.processing import AclCommandRunner

PROFILES_EPILOG = """
Profiles:
  admin        : operations/CI user with administrative powers via ACLs (no super.users)
  broker-zk    : broker principal in ZooKeeper mode (when super.users cannot be used)
  broker-kraft : broker principal in KRaft mode (when super.users cannot be used)

Examples:
  # Admin, local
  %(prog)s -m admin -b localhost:9093 -u ops-admin

  # Admin, remote with CLI auth
  %(prog)s -m admin -b kafka-prod:9093 -u ops-admin -c client.properties

  # Broker in ZK mode (wide set)
  %(prog)s -m broker-zk -b localhost:9093 -u broker-1

  # Broker in ZK mode (practical minimum)
  %(prog)s -m broker-zk -b kafka-prod:9093 -u broker-1 --strict -c client.properties

  # Broker in KRaft mode (wide set)
  %(prog)s -m broker-kraft -b kafka-dev:9093 -u broker-1
"""


def add_common_arguments(parser: ArgumentParser) -> ArgumentParser:
    """
    Options left to None fall back to the config file, then env vars, then defaults.
    """
    parser.add_argument(
        "-b",
        "--bootstrap",
        default=None,
        dest="bootstrap",
        help="Bootstrap server, host:port (default: localhost:9093, env: BOOTSTRAP)",
    )
    parser.add_argument(
        "-u",
        "--principal",
        default=None,
        dest="principal_user",
        help="Principal name without 'User:', i.e. poweruser (env: PRINCIPAL_USER)",
    )
    parser.add_argument(
        "-t",
        "--topic-pattern",
        default=None,
        dest="topic_pattern",
        help="Topics pattern, '*' or a prefix (default: *, env: TOPIC_PATTERN)",
    )
    parser.add_argument(
        "-g",
        "--group-pattern",
        default=None,
        dest="group_pattern",
        help="Consumer groups pattern (default: *, env: GROUP_PATTERN)",
    )
    parser.add_argument(
        "-x",
        "--transactional-id-pattern",
        default=None,
        dest="transactional_id_pattern",
        help="transactional.id pattern (default: *, env: TXNID_PATTERN)",
    )
    parser.add_argument(
        "-U",
        "--user-pattern",
        default=None,
        dest="user_pattern",
        help="Users (entity users) pattern, for quotas/SCRAM (default: *, env: USER_ENTITY_PATTERN)",
    )
    parser.add_argument(
        "-k",
        "--kafka-bin",
        default=None,
        dest="kafka_bin",
        help="Directory of the kafka-*.sh scripts (default: /opt/kafka/bin, env: KAFKA_BIN)",
    )
    parser.add_argument(
        "-c",
        "--command-config",
        default=None,
        dest="command_config",
        help="Properties file passed to kafka-acls.sh --command-config (SASL/TLS auth)",
    )
    parser.add_argument(
        "--config-file",
        default=None,
        dest="config_file",
        help="Path to a YAML settings file",
    )
    parser.add_argument(
        "-r",
        "--remove",
        action="store_true",
        dest="remove",
        help="Remove the ACLs instead of creating them",
    )
    parser.add_argument(
        "-l",
        "--list",
        action="store_true",
        dest="list_only",
        help="List existing ACLs and exit",
    )
    parser.add_argument(
        "-n",
        "--dry-run",
        action="store_true",
        dest="dry_run",
        help="Only print the commands, do not execute them",
    )
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser


def set_parser():
    parser = ArgumentParser(
        prog="kafka-acl-profiles",
        description="Parametrized Kafka ACL profiles, applied with kafka-acls.sh",
        epilog=PROFILES_EPILOG,
        formatter_class=RawDescriptionHelpFormatter,
    )
    add_common_arguments(parser)
    parser.add_argument(
        "-m",
        "--mode",
        default=None,
        dest="mode",
        choices=PROFILE_NAMES,
        help=f"Profile to apply (default: {ADMIN}, env: MODE)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        dest="strict",
        help="For broker-zk/broker-kraft: apply the practical minimum set (default is the wide set)",
    )
    return parser


def run(args: dict) -> int:
    set_verbose(ACL_LOG, args.get("verbose", False))
    try:
        file_config = (
            load_config_file(args["config_file"]) if args.get("config_file") else None
        )
        settings = resolve_settings(args, environ, file_config)
        AclCommandRunner(settings).run()
        return 0
    except AclProfilesError as error:
        ACL_LOG.error(error)
        return error.exit_code


def main(argv=None):
    """
    Main entrypoint
    """
    _parser = set_parser()
    _args = _parser.parse_args(argv)
    return run(vars(_args))


if __name__ == "__main__":
    sys.exit(main())
