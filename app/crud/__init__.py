"""Persistence access for ORM models."""

from app.crud.users import UserRepository

__all__ = ["UserRepository"]
