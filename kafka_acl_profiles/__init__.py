#  SPDX-License-Identifier: MPL-2.0
#  Copyright 2024 John Mille <john@ews-network.net>

"""Kafka ACL profiles, applied with kafka-acls.sh"""

__version__ = "0.1.0"
