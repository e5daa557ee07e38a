# SPDX-License-Identifier: Apache-2.0

"""
Domain logic package for the términos procesales service.

This package contains the pure deadline calculation engine: holiday table,
business-day arithmetic, per-action rules and the dispatcher. Nothing here
performs I/O or logging.
"""
