# tests/conftest.py
"""Shared test fixtures.

Global State:
    The process-wide chaos switch and the shared random source outlive any
    single test. The autouse ``restore_chaos_state`` fixture puts both back
    to their defaults after every test, and resets logging so a test that
    configured logging can't leak into the next.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

import os
from collections.abc import Iterator

import pytest
from hypothesis import Phase, Verbosity, settings

from chaosdispatch.core.logging import reset_logging
from chaosdispatch.engine.global_switch import set_global_chaos
from chaosdispatch.engine.rng import seed_default_rng


@pytest.fixture(autouse=True)
def restore_chaos_state() -> Iterator[None]:
    """Start every test with global chaos on and leave it that way."""
    set_global_chaos(True)
    yield
    set_global_chaos(True)
    seed_default_rng(None)
    reset_logging()


# =============================================================================
# Hypothesis Configuration
# =============================================================================

# CI profile: Fast tests for continuous integration
settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Disable deadline for CI (timing varies)
)

# Nightly profile: Thorough testing for scheduled runs
settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Debug profile: Minimal examples with verbose output for debugging
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Load profile from environment, default to "ci"
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))
