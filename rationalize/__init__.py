# SPDX-FileCopyrightText: 2014-2024 Quantum Technology Group and Chair of Software Engineering, RWTH Aachen University
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""Best rational approximations of floating point numbers within an absolute tolerance."""

import lazy_loader as lazy

__version__ = '0.1'

__getattr__, __dir__, __all__ = lazy.attach_stub(__name__, __file__)
