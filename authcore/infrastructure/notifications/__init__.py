# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .log_notifier import LoggingResetNotifier

__all__ = ["LoggingResetNotifier"]
