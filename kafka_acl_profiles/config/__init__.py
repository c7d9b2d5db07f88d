# SPDX-License-Identifier: MPL-2.0
# Copyright 2024 John Mille <john@ews-network.net>

from __future__ import annotations

import yaml

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader

from dacite import from_dict
from importlib_resources import files as pkg_files
from jsonschema import ValidationError, validate

from kafka_acl_profiles.errors import ConfigurationError
from kafka_acl_profiles.specs.config import AclProfilesInputConfiguration


def load_config_file(file_path: str) -> AclProfilesInputConfiguration:
    try:
        with open(file_path) as fd:
            config = yaml.load(fd, Loader=Loader)
    except OSError as error:
        raise ConfigurationError(
            f"Unable to read config file {file_path}: {error}"
        ) from error
    except UnicodeDecodeError as error:
        raise ConfigurationError(
            f"Unable to decode config file {file_path}: {error}"
        ) from error
    except yaml.YAMLError as error:
        raise ConfigurationError(f"Invalid YAML in {file_path}: {error}") from error
    if config is None:
        config = {}
    schema_source = pkg_files("kafka_acl_profiles").joinpath("specs/config.json")
    try:
        validate(
            config,
            yaml.load(schema_source.read_text(), Loader=Loader),
        )
    except ValidationError as error:
        raise ConfigurationError(
            f"{file_path} does not match the configuration schema: {error.message}"
        ) from error
    return from_dict(data_class=AclProfilesInputConfiguration, data=config)
