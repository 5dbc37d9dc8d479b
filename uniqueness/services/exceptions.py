"""Domain-specific exceptions."""


class ServiceError(Exception):
    pass


class SearchModeNotFound(ServiceError):
    pass


class SearchModeUnavailable(ServiceError):
    pass


class SearchProviderError(ServiceError):
    """Raised by a search mode when its backend fails or is misconfigured."""
