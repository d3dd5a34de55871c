import logging
from datetime import date, datetime, timezone
from supabase import Client
from app.modules.tasks.schemas import TaskCreate, TaskUpdate, TaskResponse
from app.modules.households.service import HouseholdService
from app.modules.users.service import UserService
from typing import Any, Dict, List, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)


class TaskService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _with_assignees(self, rows: List[Dict[str, Any]]) -> List[TaskResponse]:
        profiles = UserService(self.supabase).get_profiles(
            [row.get("assigned_to_id") for row in rows]
        )
        tasks = []
        for row in rows:
            task = TaskResponse(**row)
            if task.assigned_to_id:
                task.assignee = profiles.get(task.assigned_to_id)
            tasks.append(task)
        return tasks

    def list_tasks(
        self,
        household_id: str,
        completed: Optional[bool] = None,
        assigned_to_id: Optional[str] = None
    ) -> List[TaskResponse]:
        """List household tasks, newest first"""
        try:
            query = self.supabase.table("tasks")\
                .select("*")\
                .eq("household_id", household_id)
            if completed is not None:
                query = query.eq("completed", completed)
            if assigned_to_id:
                query = query.eq("assigned_to_id", assigned_to_id)
            result = query.order("created_at", desc=True).execute()
        except Exception as e:
            logger.error(f"Task fetch error: {e}")
            raise HTTPException(status_code=500, detail=str(e))
        return self._with_assignees(result.data or [])

    def _get_row(self, household_id: str, task_id: str) -> Dict[str, Any]:
        try:
            result = self.supabase.table("tasks")\
                .select("*")\
                .eq("id", task_id)\
                .eq("household_id", household_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        if not result.data:
            raise HTTPException(status_code=404, detail="Task not found")
        return result.data[0]

    def get_task(self, household_id: str, task_id: str) -> TaskResponse:
        """Get task by ID"""
        return self._with_assignees([self._get_row(household_id, task_id)])[0]

    def create_task(self, household_id: str, user_id: str, task_data: TaskCreate) -> TaskResponse:
        """Create a new task"""
        title = task_data.title.strip()
        if not title:
            raise HTTPException(status_code=400, detail="Task title is required")
        if task_data.assigned_to_id:
            self._check_assignee(household_id, task_data.assigned_to_id)
        try:
            result = self.supabase.table("tasks").insert({
                "household_id": household_id,
                "title": title,
                "description": task_data.description,
                "due_date": task_data.due_date.isoformat() if task_data.due_date else None,
                "priority": task_data.priority,
                "status": task_data.status,
                "assigned_to_id": task_data.assigned_to_id,
                "completed": False,
                "created_by": user_id
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create task")

            return self._with_assignees(result.data[:1])[0]
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error creating task: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def update_task(self, household_id: str, task_id: str, task_data: TaskUpdate) -> TaskResponse:
        """Update task fields that were sent"""
        update_data = task_data.model_dump(exclude_unset=True)
        if "title" in update_data:
            title = (update_data["title"] or "").strip()
            if not title:
                raise HTTPException(status_code=400, detail="Task title is required")
            update_data["title"] = title
        if update_data.get("due_date") is not None:
            update_data["due_date"] = update_data["due_date"].isoformat()
        return self._update(household_id, task_id, update_data)

    def complete_task(self, household_id: str, task_id: str) -> TaskResponse:
        return self._update(household_id, task_id, {"completed": True})

    def assign_task(self, household_id: str, task_id: str, assigned_to_id: Optional[str]) -> TaskResponse:
        """Assign a task to a household member, or unassign it"""
        if assigned_to_id:
            self._check_assignee(household_id, assigned_to_id)
        return self._update(household_id, task_id, {"assigned_to_id": assigned_to_id})

    def _check_assignee(self, household_id: str, user_id: str):
        if not HouseholdService(self.supabase).is_member(household_id, user_id):
            raise HTTPException(status_code=400, detail="Assignee must be a member of the household")

    def _update(self, household_id: str, task_id: str, update_data: Dict[str, Any]) -> TaskResponse:
        self._get_row(household_id, task_id)
        try:
            update_data["updated_at"] = datetime.now(timezone.utc).isoformat()
            result = self.supabase.table("tasks")\
                .update(update_data)\
                .eq("id", task_id)\
                .eq("household_id", household_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Task not found")

            return self._with_assignees(result.data[:1])[0]
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error updating task {task_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def delete_task(self, household_id: str, task_id: str) -> bool:
        """Delete task"""
        self._get_row(household_id, task_id)
        try:
            result = self.supabase.table("tasks")\
                .delete()\
                .eq("id", task_id)\
                .eq("household_id", household_id)\
                .execute()
            return len(result.data) > 0
        except Exception as e:
            logger.error(f"Error deleting task {task_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    def list_due_between(self, household_id: str, start: date, end: date) -> List[TaskResponse]:
        """Tasks whose due date falls within [start, end], earliest first"""
        try:
            result = self.supabase.table("tasks")\
                .select("*")\
                .eq("household_id", household_id)\
                .gte("due_date", start.isoformat())\
                .lte("due_date", end.isoformat())\
                .order("due_date")\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching tasks: {e}")
            raise HTTPException(status_code=500, detail=str(e))
        return self._with_assignees(result.data or [])
