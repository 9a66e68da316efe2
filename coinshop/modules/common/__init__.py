"""Abstractions shared by the domain services."""

from .unit_of_work import UnitOfWork, UnitOfWorkFactory, UnitState

__all__ = ["UnitOfWork", "UnitOfWorkFactory", "UnitState"]
