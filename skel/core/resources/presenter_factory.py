"""Construction of presenter (behavior-binding) objects."""

from dataclasses import dataclass
from typing import Any, Callable, Optional

from .component_cache import ComponentResourceEntry, presenter_display_name
from .errors import PresenterConstructionFailure
from .interfaces import FailureReporter


PRESENTER_STAGE = "Error creating a presenter instance"


@dataclass(frozen=True)
class PresenterFailure:
    """Why a presenter could not be built.

    Attributes:
        stage: Creation stage identifier
        context: Which presenter and component were involved
        cause: Text of the underlying error
    """
    stage: str
    context: str
    cause: str


@dataclass(frozen=True)
class PresenterResult:
    """Either a presenter or the reason there is none. Check `ok` before use."""
    presenter: Any = None
    error: Optional[PresenterFailure] = None

    @classmethod
    def success(cls, presenter: Any) -> "PresenterResult":
        return cls(presenter=presenter)

    @classmethod
    def failure(cls, error: PresenterFailure) -> "PresenterResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        """Return the presenter, raising PresenterConstructionFailure on the error variant."""
        if self.error is not None:
            raise PresenterConstructionFailure(self.error)
        return self.presenter

    def __bool__(self) -> bool:
        return self.ok


class PresenterFactory:
    """Builds presenters from the classes stored in component entries.

    Construction errors never escape: they are handed to the reporter and
    returned as a failed `PresenterResult`, so one broken component instance
    does not take down the rest of the rendering.
    """

    def __init__(self, reporter: FailureReporter):
        self._reporter = reporter

    def create(
        self,
        entry: ComponentResourceEntry,
        component: Any,
        invalidate: Callable[..., Any],
    ) -> PresenterResult:
        """Instantiate `entry.presenter_class(component, invalidate)`.

        Args:
            entry: Cached component entry holding the presenter class
            component: The component instance the presenter binds to
            invalidate: Callback the presenter calls to request a re-render
        """
        presenter_class = entry.presenter_class
        presenter_name = "<no presenter>"

        try:
            if presenter_class is None:
                raise LookupError(f"no presenter registered for '{entry.name}'")
            presenter_name = presenter_display_name(presenter_class)
            presenter = presenter_class(component, invalidate)
        except Exception as e:
            failure = PresenterFailure(
                stage=PRESENTER_STAGE,
                context=(
                    f"Encountered an error during the initialization of {presenter_name} "
                    f"for component {entry.name}"
                ),
                cause=f"{type(e).__name__}: {e}",
            )
            self._reporter.report_failure(failure.stage, failure.context, failure.cause)
            return PresenterResult.failure(failure)

        return PresenterResult.success(presenter)
