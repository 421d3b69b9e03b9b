#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2026 plumiume
# SPDX-License-Identifier: MIT
# License: MIT License (https://opensource.org/licenses/MIT)
# See LICENSE.txt for details.

"""
Microservice management package.
"""

from .commands import app, main
from .dispatcher import CommandDispatcher, load_config, normalise_container_name
from .models import (
    CommandResult,
    CustomHandler,
    FailurePolicy,
    Fatal,
    Ignore,
    YuConfig,
)
from .runner import ProcessRunner
from .version import VERSION

__all__ = [
    # Commands
    "app",
    "main",
    # Dispatcher
    "CommandDispatcher",
    "load_config",
    "normalise_container_name",
    # Runner
    "ProcessRunner",
    # Models
    "CommandResult",
    "CustomHandler",
    "FailurePolicy",
    "Fatal",
    "Ignore",
    "YuConfig",
    "VERSION",
]
