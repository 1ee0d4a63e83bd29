#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Powerhouse Planner v1.0 - Models Package
Data models and enums for the planner
"""

from .enums import (
    ClockFormat,
    WeekStart
)

from .block import (
    ValidationError,
    Block,
    blocks_to_dicts,
    blocks_from_dicts,
    copy_blocks
)

__all__ = [
    # Enums
    'ClockFormat',
    'WeekStart',

    # Block model
    'ValidationError',
    'Block',
    'blocks_to_dicts',
    'blocks_from_dicts',
    'copy_blocks'
]
