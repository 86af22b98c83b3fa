# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Missions: the fixed catalog, the per-mission gameplay states, and the
lifecycle that turns a compile into Success or Failed.
"""
