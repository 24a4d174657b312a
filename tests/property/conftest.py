"""Hypothesis profiles for the flow property tests.

Generated flows are whole documents (dozens of states, nested actions), so
examples are expensive and the health checks about slow or large data are
expected. Pick a profile with ``FLOWKPI_HYPOTHESIS_PROFILE``:

- ``default``: local runs
- ``ci``: fewer, reproducible examples
- ``deep``: many examples, for hunting pipeline crashes on odd documents
"""

import os

from hypothesis import HealthCheck, Phase, settings

PROFILE_ENV_VAR = "FLOWKPI_HYPOTHESIS_PROFILE"

_LARGE_DOCUMENTS = [HealthCheck.too_slow, HealthCheck.data_too_large]

settings.register_profile(
    "default",
    max_examples=100,
    deadline=None,
    suppress_health_check=_LARGE_DOCUMENTS,
)

settings.register_profile(
    "ci",
    max_examples=40,
    deadline=None,
    derandomize=True,
    print_blob=True,
    suppress_health_check=[*_LARGE_DOCUMENTS, HealthCheck.filter_too_much],
)

settings.register_profile(
    "deep",
    max_examples=1000,
    deadline=None,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    suppress_health_check=_LARGE_DOCUMENTS,
)

settings.load_profile(os.getenv(PROFILE_ENV_VAR, "default"))
