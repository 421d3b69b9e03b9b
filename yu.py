#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# Copyright (c) 2026 plumiume
# SPDX-License-Identifier: MIT
# License: MIT License (https://opensource.org/licenses/MIT)
# See LICENSE.txt for details.

"""
Command-line tool that helps you manage your microservices.

Run it from the project root; service directories are looked up there.
"""

from yu_src.commands import main

if __name__ == "__main__":
    main()
