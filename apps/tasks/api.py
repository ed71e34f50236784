"""
API Router for Tasks app.

All endpoints require a bearer token; a user only ever sees and changes
their own tasks.
"""
from typing import List, Optional

from django.http import HttpRequest
from ninja import Router
from ninja.responses import codes_4xx

from apps.core.responses import ErrorResponse, to_response
from apps.identity.api import require_auth
from . import services
from .dtos import (
    CreateTaskRequest, PaginatedTaskResponse, ReorderRequest,
    TaskResponse, UpdateSortOrderRequest, UpdateTaskRequest,
)
from .models import Priority

router = Router(tags=["Tasks"])


# =============================================================================
# Listing
# =============================================================================

@router.get("", response={200: List[TaskResponse], codes_4xx: ErrorResponse}, auth=None)
def list_tasks(
    request: HttpRequest,
    is_complete: Optional[bool] = None,
    priority: Optional[Priority] = None,
):
    """
    List the current user's tasks ordered by sort order.
    Optionally filtered by completion state and/or priority.
    """
    user_id = require_auth(request)
    return to_response(request, services.get_all_by_user(user_id, is_complete, priority))


@router.get("/paginated", response={200: PaginatedTaskResponse, codes_4xx: ErrorResponse}, auth=None)
def list_tasks_paginated(
    request: HttpRequest,
    page: int = 1,
    page_size: int = 10,
    is_complete: Optional[bool] = None,
    priority: Optional[Priority] = None,
):
    """One page of the current user's tasks. page_size is capped at 100."""
    user_id = require_auth(request)
    result = services.get_paginated(user_id, page, page_size, is_complete, priority)
    return to_response(request, result)


# =============================================================================
# Batch ordering
# =============================================================================

@router.patch("/sort-order", response={204: None, codes_4xx: ErrorResponse}, auth=None)
def update_sort_order(request: HttpRequest, payload: UpdateSortOrderRequest):
    """
    Set explicit sort orders for several tasks at once.
    All-or-nothing: one missing or foreign task rejects the whole batch.
    """
    user_id = require_auth(request)
    sort_orders = [(item.task_id, item.sort_order) for item in payload.items]
    return to_response(request, services.update_sort_order(user_id, sort_orders))


@router.put("/reorder", response={204: None, codes_4xx: ErrorResponse}, auth=None)
def reorder_tasks(request: HttpRequest, payload: ReorderRequest):
    """Reorder tasks; each task's sort order becomes its index in task_ids."""
    user_id = require_auth(request)
    return to_response(request, services.reorder(user_id, payload.task_ids))


# =============================================================================
# Single task
# =============================================================================

@router.post("", response={201: TaskResponse, codes_4xx: ErrorResponse}, auth=None)
def create_task(request: HttpRequest, payload: CreateTaskRequest):
    user_id = require_auth(request)
    return to_response(request, services.create(user_id, payload), success_status=201)


@router.get("/{int:task_id}", response={200: TaskResponse, codes_4xx: ErrorResponse}, auth=None)
def get_task(request: HttpRequest, task_id: int):
    user_id = require_auth(request)
    return to_response(request, services.get_by_id(task_id, user_id))


@router.put("/{int:task_id}", response={200: TaskResponse, codes_4xx: ErrorResponse}, auth=None)
def update_task(request: HttpRequest, task_id: int, payload: UpdateTaskRequest):
    """Replace title, description, completion, priority and sort order."""
    user_id = require_auth(request)
    return to_response(request, services.update(task_id, user_id, payload))


@router.delete("/{int:task_id}", response={204: None, codes_4xx: ErrorResponse}, auth=None)
def delete_task(request: HttpRequest, task_id: int):
    user_id = require_auth(request)
    return to_response(request, services.delete(task_id, user_id))


@router.patch("/{int:task_id}/toggle-complete", response={200: TaskResponse, codes_4xx: ErrorResponse}, auth=None)
def toggle_task_complete(request: HttpRequest, task_id: int):
    """Flip the task's completion flag and return the updated task."""
    user_id = require_auth(request)
    return to_response(request, services.toggle_complete(task_id, user_id))
