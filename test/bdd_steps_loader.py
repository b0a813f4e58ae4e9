"""
BDD Steps Import Module

Consolidates all Gherkin step definitions (Given/When/Then).
This module is imported by conftest.py to register all BDD steps with pytest-bdd.

Organization:
- Ticketing fixtures (state dict, hand-built use case wiring)
- Event ticketing steps
"""

# =============================================================================
# Ticketing Fixtures
# =============================================================================
from test.service.ticketing.fixtures import *  # noqa: E402, F403

# =============================================================================
# Event Ticketing Steps
# =============================================================================
from test.service.ticketing.integration.steps.event_ticketing.given import *  # noqa: E402, F403
from test.service.ticketing.integration.steps.event_ticketing.then import *  # noqa: E402, F403
from test.service.ticketing.integration.steps.event_ticketing.when import *  # noqa: E402, F403
