# Copyright (c) 2025 Henru Wang
# All rights reserved.

"""End-to-end tests running Rust sources through analysis and rendering."""
