# SPDX-License-Identifier: MIT
"""Core types: errors and the exported build environment."""
