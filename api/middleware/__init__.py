# SPDX-License-Identifier: Apache-2.0

"""
Middleware package for request processing.

This package contains the CORS and error handling components wrapped around
the términos procesales endpoints.
"""
