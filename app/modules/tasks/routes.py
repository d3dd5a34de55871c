from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.tasks.schemas import TaskCreate, TaskUpdate, TaskAssign, TaskResponse
from app.modules.tasks.service import TaskService
from app.modules.households.schemas import MembershipResponse
from app.core.dependencies import require_household_action
from supabase import Client
from typing import List, Optional

router = APIRouter(prefix="/tasks", tags=["tasks"])


def get_task_service(supabase: Client = Depends(get_supabase)) -> TaskService:
    return TaskService(supabase)


@router.get("", response_model=List[TaskResponse])
async def list_tasks(
    completed: Optional[bool] = None,
    assigned_to_id: Optional[str] = None,
    membership: MembershipResponse = Depends(require_household_action("tasks:read")),
    service: TaskService = Depends(get_task_service)
):
    """List household tasks, optionally filtered by completion or assignee"""
    return service.list_tasks(membership.household_id, completed=completed, assigned_to_id=assigned_to_id)


@router.post("", response_model=TaskResponse, status_code=201)
async def create_task(
    task_data: TaskCreate,
    membership: MembershipResponse = Depends(require_household_action("tasks:create")),
    service: TaskService = Depends(get_task_service)
):
    """Create a task in the household"""
    return service.create_task(membership.household_id, membership.user_id, task_data)


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: str,
    membership: MembershipResponse = Depends(require_household_action("tasks:read")),
    service: TaskService = Depends(get_task_service)
):
    return service.get_task(membership.household_id, task_id)


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: str,
    task_data: TaskUpdate,
    membership: MembershipResponse = Depends(require_household_action("tasks:update")),
    service: TaskService = Depends(get_task_service)
):
    """Edit a task"""
    return service.update_task(membership.household_id, task_id, task_data)


@router.post("/{task_id}/complete", response_model=TaskResponse)
async def complete_task(
    task_id: str,
    membership: MembershipResponse = Depends(require_household_action("tasks:update")),
    service: TaskService = Depends(get_task_service)
):
    """Mark a task as completed"""
    return service.complete_task(membership.household_id, task_id)


@router.put("/{task_id}/assign", response_model=TaskResponse)
async def assign_task(
    task_id: str,
    assignment: TaskAssign,
    membership: MembershipResponse = Depends(require_household_action("tasks:assign")),
    service: TaskService = Depends(get_task_service)
):
    """Assign a task to a household member (null to unassign)"""
    return service.assign_task(membership.household_id, task_id, assignment.assigned_to_id)


@router.delete("/{task_id}", status_code=204)
async def delete_task(
    task_id: str,
    membership: MembershipResponse = Depends(require_household_action("tasks:delete")),
    service: TaskService = Depends(get_task_service)
):
    """Delete a task"""
    service.delete_task(membership.household_id, task_id)
    return None
