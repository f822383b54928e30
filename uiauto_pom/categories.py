# uiauto_pom/categories.py
"""
@file categories.py
@brief Object categories and their construction policies.

Three categories exist and the set is closed:

- group: reusable step groups, constructed directly
- step:  interaction-step collections, constructed directly, optionally
         with a page object injected as the first argument
- page:  page objects, constructed and then awaited until ready
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, Tuple

from .config import WaitOptions
from .exceptions import ConstructionError
from .readiness import Readiness, check_readiness

if TYPE_CHECKING:
    from .context import ObjectContext

log = logging.getLogger(__name__)

Args = Tuple[Any, ...]
Kwargs = Dict[str, Any]


class Category(Enum):
    GROUP = "group"
    STEP = "step"
    PAGE = "page"

    @classmethod
    def parse(cls, value: Any) -> Category:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            allowed = [c.value for c in cls]
            raise ValueError(f"Unknown object category: {value!r}. Allowed: {allowed}") from None


class ObjectType(Enum):
    COMMON = "common"
    AWAITED = "awaited"


def _accepts_arguments(cls: type) -> bool:
    """True if cls can be called with at least one argument."""
    try:
        return bool(inspect.signature(cls).parameters)
    except (TypeError, ValueError):
        return True


def _check_binding(cls: type, args: Args, kwargs: Kwargs) -> None:
    try:
        signature = inspect.signature(cls)
    except (TypeError, ValueError):
        # builtins and some C types have no introspectable signature
        return
    try:
        signature.bind(*args, **kwargs)
    except TypeError as e:
        raise ConstructionError(cls.__name__, str(e)) from e


def passthrough_args(
    context: "ObjectContext", args: Args, kwargs: Kwargs, class_ref: type
) -> Tuple[Args, Kwargs]:
    return args, kwargs


def format_step_args(
    context: "ObjectContext", args: Args, kwargs: Kwargs, class_ref: type
) -> Tuple[Args, Kwargs]:
    """
    Put the step's page object ahead of the caller's arguments.

    An explicit ``page`` keyword always wins. Without it, the configured
    default page is injected only when the call has no arguments and the
    step class accepts one.
    """
    kwargs = dict(kwargs)
    page = kwargs.pop("page", None)

    if page is None and not args and not kwargs:
        default_page = context.settings.steps_page_arg
        if default_page and _accepts_arguments(class_ref):
            page = default_page

    if page is None:
        return args, kwargs

    page_instance = context.pages(page) if isinstance(page, (str, Enum)) else page
    return (page_instance,) + tuple(args), kwargs


def format_page_args(
    context: "ObjectContext", args: Args, kwargs: Kwargs, class_ref: type
) -> Tuple[Args, Kwargs]:
    """Fall back to the configured default page keyword arguments."""
    if args or kwargs:
        return args, kwargs
    page_args = context.settings.page_args
    if page_args and _accepts_arguments(class_ref):
        return args, dict(page_args)
    return args, kwargs


@dataclass(frozen=True)
class CategoryPolicy:
    category: Category
    suffix: str
    object_type: ObjectType
    format_args: Callable[["ObjectContext", Args, Kwargs, type], Tuple[Args, Kwargs]]

    def construct(
        self,
        class_ref: type,
        args: Args,
        kwargs: Kwargs,
        *,
        readiness: Optional[Readiness] = None,
        wait_options: Optional[WaitOptions] = None,
    ) -> Any:
        """
        Build an instance of class_ref.

        AWAITED objects are handed to readiness before they are returned,
        and a readiness timeout raises ReadinessTimeoutError. Errors from
        the constructor itself propagate unchanged. Passing readiness=None
        constructs AWAITED objects directly.
        """
        _check_binding(class_ref, args, kwargs)
        instance = class_ref(*args, **kwargs)
        log.debug("Constructed %s %s", self.category.value, class_ref.__name__)

        if self.object_type is ObjectType.AWAITED and readiness is not None:
            check_readiness(readiness, instance, wait_options)
        return instance


POLICIES: Dict[Category, CategoryPolicy] = {
    Category.GROUP: CategoryPolicy(Category.GROUP, "group", ObjectType.COMMON, passthrough_args),
    Category.STEP: CategoryPolicy(Category.STEP, "step", ObjectType.COMMON, format_step_args),
    Category.PAGE: CategoryPolicy(Category.PAGE, "page", ObjectType.AWAITED, format_page_args),
}


def policy_for(category: Any) -> CategoryPolicy:
    return POLICIES[Category.parse(category)]
