"""
Hexagonal Architecture Layer Rules.

Dependency direction between layers:
- Domain must not access Application, Infrastructure or Runtime
- Application must not access Infrastructure or Runtime
- Infrastructure must not access Runtime
"""

import pytest
from pytestarch import LayerRule


class TestLayerRules:
    """Permanent architecture rules enforcing dependency direction."""

    @pytest.mark.parametrize("outer", ["application", "infrastructure", "runtime"])
    def test_domain_does_not_access_outer_layers(self, evaluable, layers, outer):
        """Domain must be pure: no orchestration or adapter dependency."""
        rule = (
            LayerRule()
            .based_on(layers)
            .layers_that()
            .are_named("domain")
            .should_not()
            .access_layers_that()
            .are_named(outer)
        )
        rule.assert_applies(evaluable)

    @pytest.mark.parametrize("outer", ["infrastructure", "runtime"])
    def test_application_does_not_access_adapters(self, evaluable, layers, outer):
        """Application depends on domain ports, not concrete adapters."""
        rule = (
            LayerRule()
            .based_on(layers)
            .layers_that()
            .are_named("application")
            .should_not()
            .access_layers_that()
            .are_named(outer)
        )
        rule.assert_applies(evaluable)

    def test_infrastructure_does_not_access_runtime(self, evaluable, layers):
        """Adapters never reach into the composition root."""
        rule = (
            LayerRule()
            .based_on(layers)
            .layers_that()
            .are_named("infrastructure")
            .should_not()
            .access_layers_that()
            .are_named("runtime")
        )
        rule.assert_applies(evaluable)
