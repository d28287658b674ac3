"""Presentation-layer exceptions raised from guard decisions."""

from storefront.application.services.access_gate import Notification
from storefront.domain.enums import AccessState
from storefront.domain.exceptions import StorefrontException


class ViewRedirectException(StorefrontException):
    """A view guard denied access; answered with 303 See Other to location."""

    def __init__(self, state: AccessState, location: str) -> None:
        super().__init__(
            "Access to this view is denied",
            "VIEW_DENIED",
            {"state": state.value, "location": location},
        )
        self.state = state
        self.location = location


class MutationRestrictedException(StorefrontException):
    """A mutation was intercepted by the MutationGuard; answered with 403."""

    def __init__(self, notification: Notification, error_code: str = "DEMO_RESTRICTED") -> None:
        super().__init__(
            notification.title,
            error_code,
            {"description": notification.description},
        )
        self.notification = notification
