"""
Tests for ObjectContext: resolution, caching and scoped blocks.
"""

import pytest

import sample_objects
from uiauto_pom.categories import Category
from uiauto_pom.config import Settings, TimeConfig, WaitOptions
from uiauto_pom.context import ObjectContext, ObjectsMixin
from uiauto_pom.exceptions import ConstructionError, ReadinessTimeoutError, ResolutionError
from uiauto_pom.exceptions import TimeoutError as WaitTimeoutError


class TestGroups:
    """Tests for group objects."""

    def test_login_group_is_per_context_singleton(self, ctx):
        """groups('login') builds LoginGroup once; later calls return the same object."""
        first = ctx.groups("login")
        second = ctx.groups("login", "different", retry=True)

        assert isinstance(first, sample_objects.LoginGroup)
        assert second is first
        assert first.args == ()
        assert len(sample_objects.CREATED) == 1

    def test_groups_never_await(self, ctx, readiness):
        ctx.groups("login")
        assert readiness.calls == []

    def test_chaining(self, ctx):
        assert ctx.groups("login").complete() == "completed"


class TestPages:
    """Tests for page objects."""

    def test_page_awaits_and_chains(self, ctx, readiness):
        """pages('home').click_element() awaits readiness and returns the method result."""
        result = ctx.pages("home").click_element()

        assert result == "clicked"
        assert len(readiness.calls) == 1
        assert isinstance(readiness.instances[0], sample_objects.HomePage)

    def test_cached_page_not_awaited_again(self, ctx, readiness):
        first = ctx.pages("home")
        assert ctx.pages("home") is first
        assert len(readiness.calls) == 1

    def test_wait_options_passed(self, ctx, readiness):
        ctx.pages("home")
        _, options = readiness.calls[0]
        assert options == WaitOptions(timeout=1.0, interval=0.05)

    def test_wait_options_follow_time_config(self, registry, readiness):
        """Without fixed wait options, the current TimeConfig applies."""
        ctx = ObjectContext(registry, readiness=readiness)
        with TimeConfig.override(page_ready={"timeout": 3.5}):
            ctx.pages("home")

        _, options = readiness.calls[0]
        assert options.timeout == 3.5

    def test_await_pages_disabled(self, registry, readiness):
        ctx = ObjectContext(registry, Settings(await_pages=False), readiness=readiness)
        ctx.pages("home")
        assert readiness.calls == []

    def test_readiness_timeout_surfaces(self, registry):
        """A page that never becomes ready raises ReadinessTimeoutError."""
        ctx = ObjectContext(registry, wait_options=WaitOptions(timeout=0.2, interval=0.05))

        with pytest.raises(ReadinessTimeoutError) as exc_info:
            ctx.pages("never_ready")

        error = exc_info.value
        assert error.page_name == "NeverReadyPage"
        assert error.accessor_name == "never_ready_page"
        assert error.timeout == 0.2
        assert ctx.cached("never_ready", Category.PAGE) is None

    def test_foreign_timeout_wrapped(self, registry):
        """TimeoutErrors from a custom readiness capability become ReadinessTimeoutError."""
        def readiness(instance, options):
            raise TimeoutError("driver gave up")

        ctx = ObjectContext(registry, readiness=readiness, wait_options=WaitOptions(1.0, 0.1))
        with pytest.raises(ReadinessTimeoutError) as exc_info:
            ctx.pages("home")

        assert isinstance(exc_info.value.original_exception, TimeoutError)
        assert isinstance(exc_info.value, WaitTimeoutError)

    def test_constructor_timeout_not_wrapped(self, ctx, readiness):
        """A TimeoutError raised by the page constructor propagates as is."""
        with pytest.raises(TimeoutError, match="socket connect timed out") as exc_info:
            ctx.pages("slow_boot")

        assert not isinstance(exc_info.value, ReadinessTimeoutError)
        assert readiness.calls == []
        assert ctx.cached("slow_boot", Category.PAGE) is None

    def test_timeout_message_used(self, registry):
        options = WaitOptions(timeout=0.1, interval=0.05, timeout_message="Home screen never loaded")
        ctx = ObjectContext(registry, wait_options=options)

        with pytest.raises(ReadinessTimeoutError, match="Home screen never loaded"):
            ctx.pages("never_ready")


class TestSteps:
    """Tests for step objects."""

    def test_calculator_step_with_page(self, ctx, readiness):
        """steps('calculator', page='home') builds HomePage first and passes it in."""
        step = ctx.steps("calculator", page="home")

        home = ctx.cached("home", Category.PAGE)
        assert isinstance(home, sample_objects.HomePage)
        assert step.args == (home,)
        assert readiness.instances == [home]
        assert sample_objects.CREATED == [home, step]

    def test_page_precedes_explicit_args(self, ctx):
        step = ctx.steps("calculator", 1, 2, page="home")
        assert step.args[0] is ctx.pages("home")
        assert step.args[1:] == (1, 2)

    def test_step_reuses_cached_page(self, ctx):
        home = ctx.pages("home")
        step = ctx.steps("calculator", page="home")
        assert step.page is home

    def test_block_runs_against_step(self, ctx):
        """steps('calculator', block=...) passes the step in and returns the block result."""
        result = ctx.steps("calculator", block=lambda step: step.compute(1, 2))
        assert result == 3

    def test_block_receives_cached_instance(self, ctx):
        step = ctx.steps("calculator")
        seen = []
        ctx.steps("calculator", block=seen.append)
        assert seen == [step]

    def test_step_never_awaits(self, ctx, readiness):
        ctx.steps("calculator")
        assert readiness.calls == []


class TestErrors:
    """Tests for failure paths."""

    def test_unknown_name_installs_nothing(self, ctx):
        """ResolutionError is raised and no accessor appears."""
        with pytest.raises(ResolutionError):
            ctx.pages("checkout")
        assert ctx.accessors() == []
        assert "checkout_page" not in ctx.cache

    def test_construction_error(self, ctx):
        with pytest.raises(ConstructionError):
            ctx.groups("strict")

    def test_constructor_exception_unchanged(self, ctx):
        with pytest.raises(RuntimeError, match="constructor failed"):
            ctx.groups("broken")

    def test_retry_after_failed_construction(self, ctx):
        with pytest.raises(ConstructionError):
            ctx.groups("strict")
        group = ctx.groups("strict", "acme")
        assert group.args == ("acme",)


class TestKeywordArguments:
    """Tests for keyword arguments named like the lookup parameters."""

    def test_name_keyword_reaches_constructor(self, ctx):
        """groups('named', name=...) passes name through to NamedGroup."""
        group = ctx.groups("named", name="alice")
        assert group.name == "alice"
        assert ctx.accessors() == ["named_group"]

    def test_category_keyword_reaches_constructor(self, ctx):
        group = ctx.resolve("named", Category.GROUP, name="bob", category="regression")
        assert group.category == "regression"
        assert ctx.groups("named") is group

    def test_block_still_keyword(self, ctx):
        assert ctx.groups("named", name="carol", block=lambda g: g.name) == "carol"


class TestResolve:
    """Tests for the generic resolve entry point."""

    def test_resolve_matches_entry_points(self, ctx):
        assert ctx.resolve("home", "page") is ctx.pages("home")
        assert ctx.resolve("login", Category.GROUP) is ctx.groups("login")

    def test_categories_do_not_share(self, registry, readiness):
        registry.register("group", sample_objects.LoginGroup, name="HomeGroup")
        ctx = ObjectContext(registry, readiness=readiness)

        assert ctx.groups("home") is not ctx.pages("home")
        assert ctx.accessors() == ["home_group", "home_page"]

    def test_contexts_are_isolated(self, registry, readiness):
        first = ObjectContext(registry, readiness=readiness)
        second = ObjectContext(registry, readiness=readiness)
        assert first.groups("login") is not second.groups("login")

    def test_custom_rule(self, registry, readiness):
        """A non-default rule can force rebuilds on argument changes."""
        def same_args(cached, args, kwargs):
            return cached.args == args

        ctx = ObjectContext(registry, readiness=readiness, rule=same_args)
        first = ctx.groups("login", "a")
        assert ctx.groups("login", "a") is first
        assert ctx.groups("login", "b") is not first
        assert ctx.accessors() == ["login_group"]


class StepDefinitions(ObjectsMixin):
    pass


class TestObjectsMixin:
    """Tests for ObjectsMixin."""

    def test_mixin_forwards(self, registry):
        StepDefinitions.pom_registry = registry
        StepDefinitions.pom_settings = Settings(await_pages=False)
        try:
            steps = StepDefinitions()
            page = steps.pages("home")
            assert steps.steps("calculator", page="home").page is page
            assert steps.groups("login") is steps.groups("login")
            assert steps.object_context is steps.object_context
            assert steps.groups("named", name="dave").name == "dave"
        finally:
            StepDefinitions.pom_registry = None
            StepDefinitions.pom_settings = None

    def test_each_object_has_own_context(self, registry):
        StepDefinitions.pom_registry = registry
        try:
            assert StepDefinitions().groups("login") is not StepDefinitions().groups("login")
        finally:
            StepDefinitions.pom_registry = None
