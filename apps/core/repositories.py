"""
Generic repositories and the UnitOfWork.

Repositories are thin wrappers over Django model managers so services can be
written against a small, uniform CRUD surface. The UnitOfWork groups the
repositories of this project and owns the transaction scope used by
multi-row writes.

Usage:
    uow = UnitOfWork()
    with uow.transaction():
        task = uow.tasks.get_by_id(task_id)
        if task is None:
            uow.rollback()
            return Result.failure(...)
        task.sort_order = 3
        uow.tasks.save(task, update_fields=['sort_order', 'updated_at'])
"""
from contextlib import contextmanager
from typing import Generic, Iterator, List, Optional, Sequence, Tuple, Type, TypeVar

from django.apps import apps
from django.db import models, transaction

M = TypeVar('M', bound=models.Model)


class Repository(Generic[M]):
    """
    CRUD operations over a single model.

    All reads and writes go to the `using` database alias (None lets the
    database router decide, which is the default database here).
    """

    def __init__(self, model: Type[M], using: Optional[str] = None):
        self.model = model
        self.using = using

    @property
    def objects(self):
        return self.model._default_manager.db_manager(self.using)

    def get_by_id(self, pk) -> Optional[M]:
        return self.objects.filter(pk=pk).first()

    def find(self, *, order_by: Sequence[str] = (), **filters) -> List[M]:
        queryset = self.objects.filter(**filters)
        if order_by:
            queryset = queryset.order_by(*order_by)
        return list(queryset)

    def exists(self, **filters) -> bool:
        return self.objects.filter(**filters).exists()

    def add(self, instance: M) -> M:
        instance.save(force_insert=True, using=self.using)
        return instance

    def save(self, instance: M, update_fields: Optional[Sequence[str]] = None) -> M:
        instance.save(update_fields=update_fields, using=self.using)
        return instance

    def remove(self, instance: M) -> None:
        instance.delete(using=self.using)

    def get_paginated(
        self,
        skip: int,
        take: int,
        *,
        order_by: Sequence[str] = ('pk',),
        **filters,
    ) -> Tuple[List[M], int]:
        """Return one page of rows plus the total number of matching rows."""
        queryset = self.objects.filter(**filters)
        total_count = queryset.count()
        items = list(queryset.order_by(*order_by)[skip:skip + take])
        return items, total_count


class UnitOfWork:
    """
    Aggregates the project's repositories and a shared transaction scope.

    Models are resolved through the app registry so this module does not
    import app models at import time. The repositories and the transaction
    share one database alias.
    """

    def __init__(self, using: Optional[str] = None):
        self.using = using
        self.users: Repository = Repository(apps.get_model('identity', 'User'), using=using)
        self.tasks: Repository = Repository(apps.get_model('tasks', 'Task'), using=using)

    @contextmanager
    def transaction(self) -> Iterator['UnitOfWork']:
        """
        Open an atomic block. Leaving it normally commits, an exception
        rolls back and propagates, and rollback() rolls back quietly.
        """
        with transaction.atomic(using=self.using):
            yield self

    def rollback(self) -> None:
        """Mark the current atomic block for rollback without raising."""
        transaction.set_rollback(True, using=self.using)
