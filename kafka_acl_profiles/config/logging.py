#  SPDX-License-Identifier: MPL-2.0
#  Copyright 2024 John Mille <john@ews-network.net>

from __future__ import annotations

import logging as logthings
import re
import sys
from copy import deepcopy


class MyFormatter(logthings.Formatter):
    default_format = "%(asctime)s [%(levelname)8s] %(message)s"
    debug_format = "%(asctime)s [%(levelname)8s] (%(filename)s.%(lineno)d , %(funcName)s,) %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    @classmethod
    def _filter_out(cls, record: str):
        if not isinstance(record, str):
            return record
        jwt = re.compile(r"eyJ[\w-]+\.[\w-]+\.[\w-]+")
        password_value = re.compile(r"(?P<key>password\s*[=:]\s*)(?P<password>\S+)")
        record = jwt.sub("******", record)
        return password_value.sub(r"\g<key>******", record)

    def _filter(self, record):
        record.msg = self._filter_out(record.msg)
        if isinstance(record.args, dict):
            args = deepcopy(record.args)
            for k, v in record.args.items():
                if k.find("password") >= 0:
                    args[k] = "******"
                else:
                    args[k] = self._filter_out(v)
            record.args = args
        elif record.args:
            record.args = tuple(self._filter_out(arg) for arg in record.args)

    def format(self, record) -> str:
        self._filter(record)
        if record.levelno == logthings.DEBUG:
            formatter = logthings.Formatter(self.debug_format, self.date_format)
        else:
            formatter = logthings.Formatter(self.default_format, self.date_format)
        return formatter.format(record)


class InfoFilter(logthings.Filter):
    """Inspired from https://stackoverflow.com/a/16066513"""

    def filter(self, rec):
        return rec.levelno in (logthings.DEBUG, logthings.INFO)


class ErrorFilter(logthings.Filter):
    """Inspired from https://stackoverflow.com/a/16066513"""

    def filter(self, rec):
        return rec.levelno not in (logthings.DEBUG, logthings.INFO)


def setup_logging(logger_name: str = "kafka_acl_profiles"):
    app_logger = logthings.getLogger(logger_name)

    for h in list(app_logger.handlers):
        app_logger.removeHandler(h)

    stdout_handler = logthings.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(MyFormatter())
    stdout_handler.setLevel(logthings.INFO)
    stdout_handler.addFilter(InfoFilter())

    stderr_handler = logthings.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(MyFormatter())
    stderr_handler.setLevel(logthings.WARNING)
    stderr_handler.addFilter(ErrorFilter())

    app_logger.addHandler(stdout_handler)
    app_logger.addHandler(stderr_handler)
    app_logger.setLevel(logthings.DEBUG)
    return app_logger


def set_verbose(logger: logthings.Logger, verbose: bool) -> None:
    """Lowers the stdout handler threshold to DEBUG when verbose is requested"""
    level = logthings.DEBUG if verbose else logthings.INFO
    for handler in logger.handlers:
        if isinstance(handler, logthings.StreamHandler) and any(
            isinstance(_filter, InfoFilter) for _filter in handler.filters
        ):
            handler.setLevel(level)


ACL_LOG = setup_logging()
