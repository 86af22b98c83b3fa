# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""Workspace scaffolding: the mission templates and the code that unpacks them."""
