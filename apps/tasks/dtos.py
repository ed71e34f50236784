"""DTOs for Tasks app."""
import math
from datetime import datetime
from typing import Annotated, List, Optional

from ninja import Schema
from pydantic import Field

from .models import Priority

# Column ranges: sort_order is a 32-bit IntegerField, ids are BigAutoField
SortOrder = Annotated[int, Field(ge=-2**31, le=2**31 - 1)]
TaskId = Annotated[int, Field(ge=-2**63, le=2**63 - 1)]


class CreateTaskRequest(Schema):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    priority: Priority = Priority.MEDIUM
    sort_order: SortOrder = 0


class UpdateTaskRequest(Schema):
    """Full replacement of the editable fields of a task."""
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    is_complete: bool = False
    priority: Priority = Priority.LOW
    sort_order: SortOrder = 0


class SortOrderItem(Schema):
    task_id: TaskId
    sort_order: SortOrder


class UpdateSortOrderRequest(Schema):
    items: List[SortOrderItem]


class ReorderRequest(Schema):
    """Task ids in the desired order; a task's sort order becomes its index."""
    task_ids: List[TaskId]


class TaskResponse(Schema):
    id: int
    title: str
    description: Optional[str] = None
    is_complete: bool
    priority: Priority
    sort_order: int
    user_id: int
    created_at: datetime
    updated_at: datetime


class PaginatedTaskResponse(Schema):
    items: List[TaskResponse]
    total_count: int
    page: int
    page_size: int
    total_pages: int
    has_previous_page: bool
    has_next_page: bool

    @classmethod
    def build(cls, items: List[TaskResponse], total_count: int, page: int, page_size: int) -> 'PaginatedTaskResponse':
        total_pages = math.ceil(total_count / page_size) if page_size else 0
        return cls(
            items=items,
            total_count=total_count,
            page=page,
            page_size=page_size,
            total_pages=total_pages,
            has_previous_page=page > 1,
            has_next_page=page < total_pages,
        )
