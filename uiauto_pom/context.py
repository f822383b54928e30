# uiauto_pom/context.py
"""
@file context.py
@brief Test-scope context resolving and caching page, step and group objects.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional

from .cache import InstanceCache, ValidationRule
from .categories import Category, ObjectType, policy_for
from .config import Settings, TimeConfig, WaitOptions
from .exceptions import ReadinessTimeoutError
from .naming import NameResolver, accessor_name
from .readiness import Readiness, await_ready, check_readiness
from .registry import ClassRegistry

log = logging.getLogger(__name__)

Block = Callable[[Any], Any]


class ObjectContext:
    """
    Owns the objects one test has resolved.

    Every accessor (``login_page``, ``calculator_step`` ...) maps to exactly
    one instance for the lifetime of the context. Discard the context at the
    end of the test to drop them.

    Example:
        ctx = ObjectContext(registry)
        ctx.pages("home").click_element()
        ctx.steps("calculator", page="home", block=lambda s: s.compute(1, 2))
    """

    def __init__(
        self,
        registry: Optional[ClassRegistry] = None,
        settings: Optional[Settings] = None,
        *,
        readiness: Optional[Readiness] = None,
        rule: Optional[ValidationRule] = None,
        wait_options: Optional[WaitOptions] = None,
    ):
        """
        @param registry Class registry; built from settings namespaces if None
        @param settings Resolution settings (defaults when None)
        @param readiness Page readiness capability (await_ready when None)
        @param rule Cache validation rule (always_reuse when None)
        @param wait_options Fixed page wait options; TimeConfig.current() when None
        """
        self.settings = settings or Settings()
        self.registry = registry or ClassRegistry(self.settings.namespaces)
        self.resolver = NameResolver(self.registry)
        self.cache = InstanceCache(rule)
        self._readiness: Readiness = readiness or await_ready
        self._wait_options = wait_options

    @property
    def wait_options(self) -> WaitOptions:
        if self._wait_options is not None:
            return self._wait_options
        return TimeConfig.current().page_ready

    def groups(self, name: Any, /, *args: Any, block: Optional[Block] = None, **kwargs: Any) -> Any:
        """
        Get (or build) a group object.

        @example ctx.groups("login").complete()
        """
        return self.resolve(name, Category.GROUP, *args, block=block, **kwargs)

    def steps(
        self,
        name: Any,
        /,
        *args: Any,
        page: Any = None,
        block: Optional[Block] = None,
        **kwargs: Any,
    ) -> Any:
        """
        Get (or build) a step object.

        With page set, the page object is resolved first and passed to the
        step constructor ahead of args.

        @example ctx.steps("calculator", page="home").verify_result()
        """
        if page is not None:
            kwargs["page"] = page
        return self.resolve(name, Category.STEP, *args, block=block, **kwargs)

    def pages(self, name: Any, /, *args: Any, block: Optional[Block] = None, **kwargs: Any) -> Any:
        """
        Get (or build and await) a page object.

        @example ctx.pages("home").click_element()
        """
        return self.resolve(name, Category.PAGE, *args, block=block, **kwargs)

    def resolve(
        self,
        name: Any,
        category: Any,
        /,
        *args: Any,
        block: Optional[Block] = None,
        **kwargs: Any,
    ) -> Any:
        """
        Resolve name in category, reusing the cached instance when valid.

        Without block the instance is returned. With block, block(instance)
        runs and its return value is returned.
        """
        policy = policy_for(category)
        class_ref, accessor = self.resolver.resolve(name, policy.category)
        call_args, call_kwargs = policy.format_args(self, tuple(args), dict(kwargs), class_ref)

        def build() -> Any:
            log.debug("Building %s for accessor %s", class_ref.__name__, accessor)
            return self._construct(policy, class_ref, accessor, call_args, call_kwargs)

        instance = self.cache.get_or_create(
            accessor, policy.category, build, call_args, call_kwargs
        )
        if block is None:
            return instance
        return block(instance)

    def _construct(self, policy, class_ref: type, accessor: str, args, kwargs) -> Any:
        awaited = policy.object_type is ObjectType.AWAITED and self.settings.await_pages
        instance = policy.construct(class_ref, args, kwargs)
        if not awaited:
            return instance

        try:
            return check_readiness(self._readiness, instance, self.wait_options)
        except ReadinessTimeoutError as e:
            if e.accessor_name is None:
                e.accessor_name = accessor
            raise

    def cached(self, name: Any, category: Any, default: Any = None) -> Any:
        """Return the cached instance for (name, category) without building it."""
        return self.cache.peek(accessor_name(name, category), default)

    def accessors(self) -> List[str]:
        """Accessor names installed on this context, in creation order."""
        return self.cache.accessors()

    def __repr__(self) -> str:
        return f"ObjectContext(accessors={self.accessors()})"


class ObjectsMixin:
    """
    Gives a test class or step-definition object groups/steps/pages.

    The context is created lazily on first use and lives as long as the
    object itself. Set ``pom_registry``/``pom_settings`` on the class to
    configure it.
    """

    pom_registry: Optional[ClassRegistry] = None
    pom_settings: Optional[Settings] = None

    @property
    def object_context(self) -> ObjectContext:
        ctx = self.__dict__.get("_object_context")
        if ctx is None:
            ctx = ObjectContext(self.pom_registry, self.pom_settings)
            self.__dict__["_object_context"] = ctx
        return ctx

    def groups(self, name: Any, /, *args: Any, block: Optional[Block] = None, **kwargs: Any) -> Any:
        return self.object_context.groups(name, *args, block=block, **kwargs)

    def steps(
        self,
        name: Any,
        /,
        *args: Any,
        page: Any = None,
        block: Optional[Block] = None,
        **kwargs: Any,
    ) -> Any:
        return self.object_context.steps(name, *args, page=page, block=block, **kwargs)

    def pages(self, name: Any, /, *args: Any, block: Optional[Block] = None, **kwargs: Any) -> Any:
        return self.object_context.pages(name, *args, block=block, **kwargs)
