# -*- coding: utf-8 -*-
"""
tests.property package bootstrap.

Shared Hypothesis configuration and strategies for the ledger property suites.

What this does on import:
- Registers named profiles (dev/ci/stress).
- Selects the active profile from HYPOTHESIS_PROFILE, otherwise "ci" when the
  CI env var is truthy and "dev" locally.
- Exports the account pool and amount strategies the suites share.

Environment knobs:
- HYPOTHESIS_PROFILE=dev|ci|stress
- CI=true (auto-pick the 'ci' profile if HYPOTHESIS_PROFILE not set)
"""
from __future__ import annotations

import os
from typing import Final, List

from hypothesis import HealthCheck, settings
from hypothesis import strategies as st

# ---- profile registry --------------------------------------------------------

settings.register_profile(
    "dev",
    settings(max_examples=50, deadline=None, suppress_health_check=[HealthCheck.too_slow]),
)
settings.register_profile(
    "ci",
    settings(
        max_examples=200,
        deadline=None,
        suppress_health_check=[HealthCheck.too_slow],
        derandomize=True,
    ),
)
settings.register_profile(
    "stress",
    settings(
        max_examples=1000,
        deadline=None,
        suppress_health_check=[HealthCheck.too_slow, HealthCheck.data_too_large],
        derandomize=True,
    ),
)


def _env_truthy(name: str) -> bool:
    v = os.getenv(name)
    return (v or "").lower() not in ("", "0", "false", "no", "off")


_active: Final[str] = os.getenv("HYPOTHESIS_PROFILE") or ("ci" if _env_truthy("CI") else "dev")
settings.load_profile(_active)

# ---- shared strategies --------------------------------------------------------

# Four fixed 20-byte holders keep collisions (self-transfers, re-approvals) frequent.
ACCOUNTS: Final[List[bytes]] = [bytes([i]) * 20 for i in range(1, 5)]

accounts = st.sampled_from(ACCOUNTS)
amounts = st.integers(min_value=0, max_value=3_000)

__all__ = ["ACCOUNTS", "accounts", "amounts"]
