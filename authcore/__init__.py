# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Credential verification and stateless password reset tokens."""

__version__ = "0.1.0"
