"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services contain business logic that doesn't naturally belong
    to a single entity or spans multiple entities/aggregates. Services that
    touch the store receive the unit of work as an explicit argument and
    never hold one themselves.
    """

    pass
