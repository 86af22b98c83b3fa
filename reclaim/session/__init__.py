# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Session layer: the controller that owns the active mission, plus the thin
text front end that drives it from stdin.
"""
