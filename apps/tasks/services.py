"""
Core services for Tasks app.

CRUD, completion toggling, filtered/paginated listing and batch reordering.
Every operation is scoped to the calling user: a task that exists but belongs
to someone else yields Task.NotOwned rather than its data.
"""
import logging
from typing import List, Optional, Sequence, Tuple

from apps.core.repositories import UnitOfWork
from apps.core.results import DomainErrors, Error, Result
from .dtos import CreateTaskRequest, PaginatedTaskResponse, TaskResponse, UpdateTaskRequest
from .models import Priority, Task

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
TASK_ORDERING = ('sort_order', 'id')


# =============================================================================
# Helpers
# =============================================================================

def to_task_response(task: Task) -> TaskResponse:
    return TaskResponse(
        id=task.id,
        title=task.title,
        description=task.description,
        is_complete=task.is_complete,
        priority=task.priority,
        sort_order=task.sort_order,
        user_id=task.user_id,
        created_at=task.created_at,
        updated_at=task.updated_at,
    )


def _task_filters(user_id: int, is_complete: Optional[bool], priority: Optional[Priority]) -> dict:
    filters = {'user_id': user_id}
    if is_complete is not None:
        filters['is_complete'] = is_complete
    if priority is not None:
        filters['priority'] = priority
    return filters


def _get_owned_task(uow: UnitOfWork, task_id: int, user_id: int, action: str) -> Tuple[Optional[Task], Optional[Error]]:
    """Load a task and check ownership. Returns (task, None) or (None, error)."""
    task = uow.tasks.get_by_id(task_id)

    if task is None:
        logger.warning("Task %s not found for %s", task_id, action)
        return None, DomainErrors.Task.not_found(task_id)

    if task.user_id != user_id:
        logger.warning(
            "User %s attempted to %s task %s owned by user %s",
            user_id, action, task_id, task.user_id,
        )
        return None, DomainErrors.Task.NOT_OWNED

    return task, None


# =============================================================================
# Queries
# =============================================================================

def get_all_by_user(
    user_id: int,
    is_complete: Optional[bool] = None,
    priority: Optional[Priority] = None,
    uow: Optional[UnitOfWork] = None,
) -> Result[List[TaskResponse]]:
    uow = uow or UnitOfWork()
    tasks = uow.tasks.find(order_by=TASK_ORDERING, **_task_filters(user_id, is_complete, priority))
    response = [to_task_response(task) for task in tasks]

    logger.info(
        "Retrieved %s tasks for user %s (is_complete: %s, priority: %s)",
        len(response), user_id, is_complete, priority,
    )
    return Result.success(response)


def get_paginated(
    user_id: int,
    page: int,
    page_size: int,
    is_complete: Optional[bool] = None,
    priority: Optional[Priority] = None,
    uow: Optional[UnitOfWork] = None,
) -> Result[PaginatedTaskResponse]:
    """
    One page of the user's tasks.

    Out-of-range input is clamped: page >= 1, 1 <= page_size <= 100
    (a page_size below 1 falls back to the default of 10).
    """
    uow = uow or UnitOfWork()
    page = max(page, 1)
    if page_size < 1:
        page_size = DEFAULT_PAGE_SIZE
    page_size = min(page_size, MAX_PAGE_SIZE)

    skip = (page - 1) * page_size
    items, total_count = uow.tasks.get_paginated(
        skip,
        page_size,
        order_by=TASK_ORDERING,
        **_task_filters(user_id, is_complete, priority),
    )

    logger.info("Retrieved page %s of tasks for user %s. Total: %s", page, user_id, total_count)
    return Result.success(PaginatedTaskResponse.build(
        items=[to_task_response(task) for task in items],
        total_count=total_count,
        page=page,
        page_size=page_size,
    ))


def get_by_id(task_id: int, user_id: int, uow: Optional[UnitOfWork] = None) -> Result[TaskResponse]:
    uow = uow or UnitOfWork()
    task, error = _get_owned_task(uow, task_id, user_id, "access")
    if error:
        return Result.failure(error)
    return Result.success(to_task_response(task))


# =============================================================================
# Commands
# =============================================================================

def create(user_id: int, payload: CreateTaskRequest, uow: Optional[UnitOfWork] = None) -> Result[TaskResponse]:
    uow = uow or UnitOfWork()

    if not uow.users.exists(id=user_id):
        logger.warning("Attempted to create task for non-existent user %s", user_id)
        return Result.failure(Error.not_found("User", user_id))

    task = uow.tasks.add(Task(
        user_id=user_id,
        title=payload.title,
        description=payload.description or '',
        priority=payload.priority,
        sort_order=payload.sort_order,
        is_complete=False,
    ))

    logger.info("Created task %s for user %s", task.id, user_id)
    return Result.success(to_task_response(task))


def update(
    task_id: int,
    user_id: int,
    payload: UpdateTaskRequest,
    uow: Optional[UnitOfWork] = None,
) -> Result[TaskResponse]:
    uow = uow or UnitOfWork()
    task, error = _get_owned_task(uow, task_id, user_id, "update")
    if error:
        return Result.failure(error)

    task.title = payload.title
    task.description = payload.description or ''
    task.is_complete = payload.is_complete
    task.priority = payload.priority
    task.sort_order = payload.sort_order
    uow.tasks.save(task)

    logger.info("Updated task %s", task_id)
    return Result.success(to_task_response(task))


def delete(task_id: int, user_id: int, uow: Optional[UnitOfWork] = None) -> Result[None]:
    uow = uow or UnitOfWork()
    task, error = _get_owned_task(uow, task_id, user_id, "delete")
    if error:
        return Result.failure(error)

    uow.tasks.remove(task)

    logger.info("Deleted task %s", task_id)
    return Result.success()


def toggle_complete(task_id: int, user_id: int, uow: Optional[UnitOfWork] = None) -> Result[TaskResponse]:
    uow = uow or UnitOfWork()
    task, error = _get_owned_task(uow, task_id, user_id, "toggle")
    if error:
        return Result.failure(error)

    task.is_complete = not task.is_complete
    uow.tasks.save(task, update_fields=['is_complete', 'updated_at'])

    logger.info("Toggled task %s completion to %s", task_id, task.is_complete)
    return Result.success(to_task_response(task))


def update_sort_order(
    user_id: int,
    sort_orders: Sequence[Tuple[int, int]],
    uow: Optional[UnitOfWork] = None,
) -> Result[None]:
    """
    Apply (task_id, sort_order) pairs in one transaction.

    The first missing or foreign task rolls back every change made so far
    and is returned as the error. Unexpected exceptions roll back and propagate.
    """
    if not sort_orders:
        return Result.success()

    uow = uow or UnitOfWork()
    try:
        with uow.transaction():
            for task_id, sort_order in sort_orders:
                task, error = _get_owned_task(uow, task_id, user_id, "update sort order for")
                if error:
                    uow.rollback()
                    return Result.failure(error)

                task.sort_order = sort_order
                uow.tasks.save(task, update_fields=['sort_order', 'updated_at'])
    except Exception:
        logger.exception("Failed to update sort order for user %s", user_id)
        raise

    logger.info("Updated sort order for %s tasks for user %s", len(sort_orders), user_id)
    return Result.success()


def reorder(user_id: int, task_ids: Sequence[int], uow: Optional[UnitOfWork] = None) -> Result[None]:
    """Set each task's sort order to its position in task_ids."""
    if not task_ids:
        return Result.success()

    sort_orders = [(task_id, index) for index, task_id in enumerate(task_ids)]
    return update_sort_order(user_id, sort_orders, uow=uow)
