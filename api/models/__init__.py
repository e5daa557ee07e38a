# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Models package - enumerations and Pydantic schemas for the términos procesales API.
"""

# Enumerations
from .enums import ActionType, LEGACY_ACTION_TYPES

# Request models
from .requests import CalculateTermsRequest

# Response models
from .responses import (
    HealthCheckResponse,
    ActionTypesResponse,
    TermResultResponse,
    UnrecognizedActionTypeResponse,
    ErrorResponse
)

__all__ = [
    # Enumerations
    "ActionType",
    "LEGACY_ACTION_TYPES",

    # Request models
    "CalculateTermsRequest",

    # Response models
    "HealthCheckResponse",
    "ActionTypesResponse",
    "TermResultResponse",
    "UnrecognizedActionTypeResponse",
    "ErrorResponse"
]
