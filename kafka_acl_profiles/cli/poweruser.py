# SPDX-License-Identifier: MPL-2.0
# Copyright 2024 John Mille <john@ews-network.net>

"""
Creates or removes a set of "almost admin" ACLs, without super.users.
Requires an authorizer enabled on the brokers (StandardAuthorizer or equivalent).
"""

import sys
from argparse import ArgumentParser, RawDescriptionHelpFormatter

from kafka_acl_profiles.acls.profiles import ADMIN
from kafka_acl_profiles.cli import add_common_arguments, run

POWERUSER_EPILOG = """
Examples:
  # Local: create the ACLs for User:poweruser
  %(prog)s -b localhost:9093 -u poweruser

  # Remote, with auth from a properties file (SASL/OAUTH or SCRAM)
  %(prog)s -b kafka-prod.internal:9093 -u svc-admin -c client.properties

  # Remove previously created ACLs
  %(prog)s -b kafka-prod.internal:9093 -u svc-admin -r -c client.properties

  # Restrict the scope to topics and groups prefixes
  %(prog)s -b localhost:9093 -u poweruser -t 'teamA-prod-' -g 'teamA-'
"""


def set_parser():
    parser = ArgumentParser(
        prog="kafka-poweruser",
        description=__doc__,
        epilog=POWERUSER_EPILOG,
        formatter_class=RawDescriptionHelpFormatter,
    )
    return add_common_arguments(parser)


def main(argv=None):
    parser = set_parser()
    args = vars(parser.parse_args(argv))
    args["mode"] = ADMIN
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
