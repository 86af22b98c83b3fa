# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Compilation and verification engine.

Subsystems:
  - compiler: runs the external toolchain on a mission source file
  - runner: launches a compiled artifact and classifies how it exited
  - oracle: reference math, sanity probes and gameplay checks
  - models: the result types everything above passes around
"""
