# SPDX-License-Identifier: MIT
"""Configuration document access."""
