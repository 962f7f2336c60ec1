# SMB FinGuard - Financial Intelligence Engine for SMBs
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
SMB FinGuard
------------

A Python financial intelligence engine for Small and Medium-sized
Businesses (SMBs). From a snapshot of transactions, balance figures,
activity logs and approval records it produces one analysis report:

- fraud signals (first-digit distribution test, near-duplicate
  transactions, round-number patterns, z-score outliers),
- liquidity, efficiency and performance ratios,
- linear forecasting, trend analysis and a cash-flow projection,
- per-actor behavioral profiles,
- compliance findings (separation of duties, approval thresholds,
  financial covenants, least privilege),
- early-warning indicators,
- prioritized recommendations synthesized from all of the above.

Every analyzer is a pure function over immutable inputs, so the engine can
run them sequentially or in a thread pool with identical results.


Version: 0.1.0

Usage:
    python -m smb_finguard.cli --help
"""

__all__ = ["engine", "models", "report", "views", "io"]

__version__ = "0.1.0"
