# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Reclaim: a survival-themed coding challenge runner.

The player edits Rust stubs under missions/, the engine compiles them with
rustc, runs the resulting binaries and checks their output against its own
reference math. Passing missions unlocks the next one.
"""

__version__ = "0.9.3"
