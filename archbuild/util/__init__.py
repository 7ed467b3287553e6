# SPDX-License-Identifier: MIT
"""Command helpers."""
